"""Use cases for listing units and previewing computed stats."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from unitstats.catalog import filter_options, filter_units, find_mods, sort_units
from unitstats.game_data import GameData, load_game_data
from unitstats.mod_effects import Mod
from unitstats.normalize import Unit
from unitstats.report import build_unit_report, build_units_table
from unitstats.sheet_client import FeedError

from ..ports.unit_feed import UnitFeedPort
from ...domain.value_objects.types import ModId, SortDirection, UnitId

logger = logging.getLogger(__name__)

# Thread pool for running blocking feed I/O
_executor = ThreadPoolExecutor(max_workers=4)


@dataclass
class PreviewStatsRequest:
    """Request to preview one unit's stats."""

    unit_id: UnitId
    level: int = 1
    mod_ids: List[ModId] = field(default_factory=list)


@dataclass
class ListUnitsRequest:
    """Request to list units with filters, sorting and a stat preview."""

    search: str = ""
    rarity: Optional[str] = None
    unit_class: Optional[str] = None
    sort: Optional[str] = None
    direction: SortDirection = SortDirection.ASC
    level: int = 1
    mod_ids: List[ModId] = field(default_factory=list)


@dataclass
class UseCaseResult:
    """Result of a use case run."""

    success: bool
    data: Any = None
    error: str | None = None
    error_code: str | None = None


class _CatalogUseCase:
    def __init__(self, feed: UnitFeedPort, game_data: GameData | None = None):
        self._feed = feed
        self._game_data = game_data

    @property
    def game_data(self) -> GameData:
        return self._game_data or load_game_data()

    async def _load(self) -> Tuple[List[Unit], List[Mod]]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_executor, self._feed.load_catalog)

    @staticmethod
    def _resolve_mods(mods: List[Mod], mod_ids: List[ModId]) -> List[Mod]:
        return find_mods(mods, mod_ids)


class PreviewStatsUseCase(_CatalogUseCase):
    """Compute one unit's stats at a level with a set of mods."""

    async def execute(self, request: PreviewStatsRequest) -> UseCaseResult:
        try:
            units, mods = await self._load()
        except FeedError as e:
            logger.error("feed unavailable: %s", e)
            return UseCaseResult(False, error=str(e), error_code="FEED_UNAVAILABLE")

        unit = next((u for u in units if u.id == request.unit_id), None)
        if unit is None:
            return UseCaseResult(
                False, error=f"Unit '{request.unit_id}' not found.", error_code="UNIT_NOT_FOUND"
            )

        try:
            selected = self._resolve_mods(mods, request.mod_ids)
        except KeyError as e:
            return UseCaseResult(False, error=f"Unknown mod id: {e.args[0]}", error_code="UNKNOWN_MOD")

        report = build_unit_report(unit, request.level, selected, self.game_data)
        return UseCaseResult(True, data=report)


class ListUnitsUseCase(_CatalogUseCase):
    """Filter, sort and compute the unit table."""

    async def execute(self, request: ListUnitsRequest) -> UseCaseResult:
        try:
            units, mods = await self._load()
        except FeedError as e:
            logger.error("feed unavailable: %s", e)
            return UseCaseResult(False, error=str(e), error_code="FEED_UNAVAILABLE")

        try:
            selected = self._resolve_mods(mods, request.mod_ids)
        except KeyError as e:
            return UseCaseResult(False, error=f"Unknown mod id: {e.args[0]}", error_code="UNKNOWN_MOD")

        shown = filter_units(units, request.search, request.rarity, request.unit_class)
        shown = sort_units(shown, request.sort, descending=request.direction == SortDirection.DESC)
        rows = build_units_table(shown, request.level, selected, self.game_data)
        data: Dict[str, Any] = {"rows": rows, "filters": filter_options(units), "total": len(units)}
        return UseCaseResult(True, data=data)


class ListModsUseCase(_CatalogUseCase):
    """Return the mod catalog."""

    async def execute(self) -> UseCaseResult:
        try:
            _, mods = await self._load()
        except FeedError as e:
            logger.error("feed unavailable: %s", e)
            return UseCaseResult(False, error=str(e), error_code="FEED_UNAVAILABLE")
        return UseCaseResult(True, data=mods)
