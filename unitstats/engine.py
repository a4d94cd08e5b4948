from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .game_data import GameData
from .level_scaling import GrowthCurve, linear_cooldown, linear_growth, scale_for_level
from .mod_effects import Mod, apply_mods
from .normalize import Unit
from .stats import MAX_LEVEL, StatBag

logger = logging.getLogger(__name__)


def exclusive_by_rarity(mods: Iterable[Mod]) -> List[Mod]:
    """Keep at most one mod per rarity tier; the last one selected wins.

    Surviving mods keep their relative order.
    """
    mods = list(mods)
    last_index: Dict[str, int] = {}
    for idx, mod in enumerate(mods):
        last_index[mod.rarity] = idx

    kept: List[Mod] = []
    for idx, mod in enumerate(mods):
        if last_index[mod.rarity] == idx:
            kept.append(mod)
        else:
            logger.warning(
                "mod %s replaced by %s (one %s mod allowed)",
                mod.id,
                mods[last_index[mod.rarity]].id,
                mod.rarity or "unrated",
            )
    return kept


def compute_stats(
    unit: Unit,
    level: int,
    mods: Sequence[Mod] = (),
    *,
    game_data: Optional[GameData] = None,
    growth: GrowthCurve = linear_growth,
    cooldown_growth: GrowthCurve = linear_cooldown,
) -> StatBag:
    leveled = scale_for_level(
        unit,
        level,
        game_data=game_data,
        growth=growth,
        cooldown_growth=cooldown_growth,
    )
    return apply_mods(leveled, exclusive_by_rarity(mods))


def compute_max_level(
    unit: Unit,
    mods: Sequence[Mod] = (),
    *,
    game_data: Optional[GameData] = None,
) -> StatBag:
    return compute_stats(unit, MAX_LEVEL, mods, game_data=game_data)
