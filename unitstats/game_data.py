from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

SCALED_STATS = ("HP", "Cooldown", "Damage")


class Rarity(str, Enum):
    """Unit and mod rarity tiers, lowest first."""

    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"
    MYTHIC = "Mythic"
    DEMONIC = "Demonic"
    ANCIENT = "Ancient"

    @property
    def rank(self) -> int:
        return RARITY_ORDER.index(self.value)

    @classmethod
    def parse(cls, value: Any) -> Optional["Rarity"]:
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return None


RARITY_ORDER = [r.value for r in Rarity]


def rarity_rank(value: Any) -> int:
    """Tier position for sorting; unknown rarities sort after Ancient."""
    rarity = Rarity.parse(value)
    return rarity.rank if rarity else len(RARITY_ORDER)


@dataclass(frozen=True)
class RollCost:
    amount: int
    is_for_gems: bool = False


@dataclass(frozen=True)
class GameData:
    stats_by_class: Mapping[str, Mapping[str, Mapping[str, float]]] = field(default_factory=dict)
    price_by_rarity: Mapping[str, int] = field(default_factory=dict)
    xp_by_rarity: Mapping[str, int] = field(default_factory=dict)
    roll_by_rarity: Mapping[str, RollCost] = field(default_factory=dict)

    def class_modifiers(self, unit_class: str) -> Mapping[str, Mapping[str, float]]:
        return self.stats_by_class.get(unit_class) or {}

    def modifier_for(self, unit_class: str, stat: str, rarity: str) -> Optional[float]:
        by_rarity = self.class_modifiers(unit_class).get(stat) or {}
        value = by_rarity.get(rarity)
        return float(value) if value is not None else None

    def price_for(self, rarity: str) -> Optional[int]:
        return self.price_by_rarity.get(rarity)

    def xp_for(self, rarity: str) -> Optional[int]:
        return self.xp_by_rarity.get(rarity)

    def roll_for(self, rarity: str) -> Optional[RollCost]:
        return self.roll_by_rarity.get(rarity)


def _unwrap_attributes(entry: Any) -> Dict[str, Any]:
    # Exported sheet values are either a bare number or {"_value": x, "_attributes": {...}}
    if isinstance(entry, dict):
        return dict(entry.get("_attributes") or {})
    return {}


def _parse_stats_by_class(raw: Dict[str, Any]) -> Dict[str, Dict[str, Dict[str, float]]]:
    out: Dict[str, Dict[str, Dict[str, float]]] = {}
    for unit_class, stats in raw.items():
        class_table: Dict[str, Dict[str, float]] = {}
        for stat, entry in (stats or {}).items():
            if stat not in SCALED_STATS:
                logger.debug("ignoring unscaled stat %s for class %s", stat, unit_class)
                continue
            class_table[stat] = {
                rarity: float(mod)
                for rarity, mod in _unwrap_attributes(entry).items()
                if isinstance(mod, (int, float)) and not isinstance(mod, bool)
            }
        out[unit_class] = class_table
    return out


def _parse_roll_costs(raw: Dict[str, Any]) -> Dict[str, RollCost]:
    out: Dict[str, RollCost] = {}
    for rarity, entry in raw.items():
        if isinstance(entry, dict):
            attrs = entry.get("_attributes") or {}
            out[rarity] = RollCost(int(entry.get("_value") or 0), bool(attrs.get("IsForGems")))
        else:
            out[rarity] = RollCost(int(entry or 0))
    return out


def game_data_from_dict(raw: Dict[str, Any]) -> GameData:
    return GameData(
        stats_by_class=_parse_stats_by_class(raw.get("StatsByClass") or {}),
        price_by_rarity={k: int(v) for k, v in (raw.get("PriceByRarity") or {}).items()},
        xp_by_rarity={k: int(v) for k, v in (raw.get("XPByRarity") or {}).items()},
        roll_by_rarity=_parse_roll_costs(raw.get("RollByRarity") or {}),
    )


def _game_data_path() -> Path:
    # Allow override via env var; fall back to bundled game_data.json
    override = os.environ.get("UNITSTATS_GAME_DATA")
    if override:
        path = Path(override)
        if path.exists():
            return path
        logger.warning("UNITSTATS_GAME_DATA points at missing file %s; using bundled data", path)
    return Path(__file__).with_name("game_data.json")


@lru_cache(maxsize=1)
def load_game_data() -> GameData:
    path = _game_data_path()
    raw = json.loads(path.read_text(encoding="utf-8"))
    data = game_data_from_dict(raw)
    logger.debug("loaded game data for %d classes from %s", len(data.stats_by_class), path)
    return data
