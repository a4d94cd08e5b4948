"""REST API routes for unit stats."""

from functools import lru_cache
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from unitstats.stats import MAX_LEVEL, MIN_LEVEL

from ..transformers.stat_transformer import (
    transform_mods,
    transform_unit_report,
    transform_units_table,
)
from ...application.ports.unit_feed import UnitFeedPort
from ...application.use_cases.preview_stats import (
    ListModsUseCase,
    ListUnitsRequest,
    ListUnitsUseCase,
    PreviewStatsRequest,
    PreviewStatsUseCase,
    UseCaseResult,
)
from ...domain.value_objects.types import ModId, SortDirection, UnitId
from ...infrastructure.adapters.sheet_feed_adapter import SheetFeedAdapter

router = APIRouter(prefix="/api", tags=["units"])

_STATUS_BY_CODE = {
    "UNIT_NOT_FOUND": 404,
    "UNKNOWN_MOD": 400,
    "FEED_UNAVAILABLE": 502,
}


class PreviewRequest(BaseModel):
    """Request body for a stat preview."""

    level: int = Field(
        default=MIN_LEVEL,
        ge=MIN_LEVEL,
        le=MAX_LEVEL,
        description="Unit level",
    )
    mod_ids: List[str] = Field(
        default_factory=list,
        alias="modIds",
        description="Mods to apply, in order",
    )

    class Config:
        populate_by_name = True


@lru_cache(maxsize=1)
def get_unit_feed() -> UnitFeedPort:
    """Shared feed adapter; override this dependency in tests."""
    return SheetFeedAdapter()


def _split_ids(mods: Optional[str]) -> List[ModId]:
    return [ModId(m.strip()) for m in (mods or "").split(",") if m.strip()]


def _raise_for(result: UseCaseResult, details: dict) -> None:
    code = result.error_code or "INTERNAL_ERROR"
    raise HTTPException(
        status_code=_STATUS_BY_CODE.get(code, 500),
        detail={
            "error": {
                "code": code,
                "message": result.error or "Request failed",
                "details": details,
            }
        },
    )


@router.get("/units")
async def list_units(
    search: str = Query("", description="Label substring"),
    rarity: Optional[str] = Query(None),
    unit_class: Optional[str] = Query(None, alias="class"),
    sort: Optional[str] = Query(None, description="Column to sort by"),
    direction: SortDirection = Query(SortDirection.ASC),
    level: int = Query(MIN_LEVEL, ge=MIN_LEVEL, le=MAX_LEVEL),
    mods: Optional[str] = Query(None, description="Comma separated mod ids"),
    feed: UnitFeedPort = Depends(get_unit_feed),
):
    """List units with filters, sorting and computed stats."""
    request = ListUnitsRequest(
        search=search,
        rarity=rarity,
        unit_class=unit_class,
        sort=sort,
        direction=direction,
        level=level,
        mod_ids=_split_ids(mods),
    )
    result = await ListUnitsUseCase(feed).execute(request)
    if not result.success:
        _raise_for(result, {"mods": request.mod_ids})
    return transform_units_table(result.data)


@router.get("/units/{unit_id}")
async def get_unit(
    unit_id: str,
    level: int = Query(MIN_LEVEL, ge=MIN_LEVEL, le=MAX_LEVEL),
    mods: Optional[str] = Query(None, description="Comma separated mod ids"),
    feed: UnitFeedPort = Depends(get_unit_feed),
):
    """Get one unit with base and computed stats."""
    request = PreviewStatsRequest(unit_id=UnitId(unit_id), level=level, mod_ids=_split_ids(mods))
    result = await PreviewStatsUseCase(feed).execute(request)
    if not result.success:
        _raise_for(result, {"unitId": unit_id})
    return transform_unit_report(result.data)


@router.post("/units/{unit_id}/preview")
async def preview_unit(
    unit_id: str,
    body: PreviewRequest,
    feed: UnitFeedPort = Depends(get_unit_feed),
):
    """Preview a unit's stats for a level and an ordered mod selection."""
    request = PreviewStatsRequest(
        unit_id=UnitId(unit_id),
        level=body.level,
        mod_ids=[ModId(m) for m in body.mod_ids],
    )
    result = await PreviewStatsUseCase(feed).execute(request)
    if not result.success:
        _raise_for(result, {"unitId": unit_id, "modIds": body.mod_ids})
    return transform_unit_report(result.data)


@router.get("/mods")
async def list_mods(feed: UnitFeedPort = Depends(get_unit_feed)):
    """List the mod catalog."""
    result = await ListModsUseCase(feed).execute()
    if not result.success:
        _raise_for(result, {})
    return {"mods": transform_mods(result.data)}
