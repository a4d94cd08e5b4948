from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Optional

from .game_data import GameData, load_game_data
from .normalize import Unit
from .stats import COOLDOWN_FLOOR, MAX_LEVEL, MIN_LEVEL, StatBag, StatValue, is_number

logger = logging.getLogger(__name__)

# (base_value, modifier, level) -> scaled value
GrowthCurve = Callable[[float, float, int], float]


def linear_growth(base_value: float, modifier: float, level: int) -> float:
    return base_value * (1 + modifier * (level - 1))


def linear_cooldown(base_value: float, modifier: float, level: int) -> float:
    return base_value + modifier * (level - 1)


def clamp_level(level: float) -> int:
    if not math.isfinite(level):
        # NaN and -inf fall to the lowest level
        clamped = MAX_LEVEL if level > 0 else MIN_LEVEL
    else:
        clamped = max(MIN_LEVEL, min(MAX_LEVEL, int(level)))
    if clamped != level:
        logger.debug("level %s clamped to %d", level, clamped)
    return clamped


def scale_for_level(
    unit: Unit,
    level: int,
    *,
    game_data: Optional[GameData] = None,
    growth: GrowthCurve = linear_growth,
    cooldown_growth: GrowthCurve = linear_cooldown,
) -> StatBag:
    """Apply class and rarity growth for ``level`` to the unit's base stats.

    Only stats with a modifier for the unit's class and rarity change; an
    unknown class leaves the bag as it is.  Level 1 is always the base bag.
    """
    level = clamp_level(level)
    bag = unit.base
    if level == MIN_LEVEL:
        return bag

    data = game_data or load_game_data()
    class_table = data.class_modifiers(unit.unit_class)
    if not class_table:
        logger.debug("no level modifiers for class %r", unit.unit_class)
        return bag

    changes: Dict[str, StatValue] = {}
    for stat in class_table:
        current = bag.get(stat)
        if not is_number(current):
            continue
        modifier = data.modifier_for(unit.unit_class, stat, unit.rarity)
        if modifier is None:
            continue
        if stat == "Cooldown":
            changes[stat] = max(COOLDOWN_FLOOR, cooldown_growth(float(current), modifier, level))
        else:
            changes[stat] = growth(float(current), modifier, level)
    return bag.updated(changes)
