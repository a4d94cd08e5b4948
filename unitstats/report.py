from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence

from .engine import compute_stats, exclusive_by_rarity
from .game_data import GameData, load_game_data
from .level_scaling import clamp_level
from .mod_effects import Mod
from .normalize import Unit
from .stats import MIN_LEVEL, StatBag, is_unavailable


def mod_summary(mod: Mod) -> Dict[str, Any]:
    return {
        "id": mod.id,
        "label": mod.label,
        "rarity": mod.rarity,
        "description": mod.description,
        "effects": [asdict(e) for e in mod.effects],
    }


def build_unit_report(
    unit: Unit,
    level: int = MIN_LEVEL,
    mods: Sequence[Mod] = (),
    game_data: Optional[GameData] = None,
) -> Dict[str, Any]:
    data = game_data or load_game_data()
    level = clamp_level(level)
    applied = exclusive_by_rarity(mods)

    modified: Optional[StatBag] = None
    if level > MIN_LEVEL or applied:
        modified = compute_stats(unit, level, applied, game_data=data)

    roll = data.roll_for(unit.rarity)
    return {
        "id": unit.id,
        "label": unit.label,
        "class": unit.unit_class,
        "rarity": unit.rarity,
        "community_ranking": unit.community_ranking,
        "level": level,
        "price": data.price_for(unit.rarity),
        "xp": data.xp_for(unit.rarity),
        "roll": asdict(roll) if roll else None,
        "base": unit.base,
        "modified": modified,
        "mods": [mod_summary(m) for m in applied],
    }


def build_units_table(
    units: Sequence[Unit],
    level: int = MIN_LEVEL,
    mods: Sequence[Mod] = (),
    game_data: Optional[GameData] = None,
) -> List[Dict[str, Any]]:
    data = game_data or load_game_data()
    # Resolve rarity conflicts once for the whole table
    applied = exclusive_by_rarity(mods)
    rows: List[Dict[str, Any]] = []
    for u in units:
        bag = compute_stats(u, level, applied, game_data=data)
        rows.append({"id": u.id, "community_ranking": u.community_ranking, "stats": bag})
    return rows


def to_jsonable(obj: Any) -> Any:
    """Convert stat bags and the unavailable marker into plain JSON values."""
    if isinstance(obj, StatBag):
        return {k: to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, dict):
        return {k: to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if is_unavailable(obj):
        return None
    return obj
