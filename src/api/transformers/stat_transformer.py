"""Transform stat reports into the frontend JSON format."""

import logging
from typing import Any, Dict, List

from unitstats.mod_effects import Mod
from unitstats.render import format_stat
from unitstats.report import mod_summary, to_jsonable
from unitstats.stats import StatBag

logger = logging.getLogger(__name__)


def _to_camel_case(snake_str: str) -> str:
    """Convert snake_case to camelCase."""
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _camelize(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {_to_camel_case(k): _camelize(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_camelize(v) for v in obj]
    return obj


def transform_stat_bag(bag: StatBag | None) -> Dict[str, Any] | None:
    """Raw values (unavailable as null) plus display strings.

    Stat names are kept as they appear in the feed.
    """
    if bag is None:
        return None
    return {
        "values": to_jsonable(bag),
        "display": {k: format_stat(k, v) for k, v in bag.items()},
    }


def transform_unit_report(report: Dict[str, Any]) -> Dict[str, Any]:
    body = {k: v for k, v in report.items() if k not in ("base", "modified", "mods")}
    out = _camelize(to_jsonable(body))
    out["mods"] = _camelize(report.get("mods") or [])
    out["baseStats"] = transform_stat_bag(report["base"])
    out["modifiedStats"] = transform_stat_bag(report.get("modified"))
    return out


def transform_units_table(data: Dict[str, Any]) -> Dict[str, Any]:
    rows: List[Dict[str, Any]] = []
    for row in data.get("rows") or []:
        rows.append(
            {
                "id": row["id"],
                "communityRanking": to_jsonable(row.get("community_ranking")),
                "stats": transform_stat_bag(row["stats"]),
            }
        )
    return {
        "units": rows,
        "filters": data.get("filters") or {},
        "total": data.get("total", len(rows)),
    }


def transform_mods(mods: List[Mod]) -> List[Dict[str, Any]]:
    return [_camelize(mod_summary(m)) for m in mods]
