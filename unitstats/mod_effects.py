"""Mod application stage.

Every effect a mod carries is routed through ``STAT_RULES``, which maps the
effect's stat key to a :class:`CombineKind`.  Each kind has one pure transform
``(current_value, effect) -> new_value``.  Mods are folded left to right, so a
later mod sees the result of the earlier ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .stats import (
    COOLDOWN_FLOOR,
    PROBABILITY_CAP,
    StatBag,
    StatValue,
    is_number,
    is_unavailable,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Effect:
    stat: str
    amount: Optional[float] = None
    chance: Optional[float] = None


@dataclass(frozen=True)
class Mod:
    id: str
    label: str
    rarity: str
    effects: Tuple[Effect, ...] = field(default_factory=tuple)
    description: str = ""


class CombineKind(str, Enum):
    MULTIPLICATIVE = "multiplicative"
    ADDITIVE_FLOORED = "additive_floored"
    ADDITIVE_CAPPED = "additive_capped"
    CRIT_COEFFICIENT = "crit_coefficient"
    LIFESTEAL = "lifesteal"
    ADDITIVE = "additive"
    TAG_APPEND = "tag_append"


ATTACK_EFFECT_TAGS = ("Frost", "Fire", "Poison", "Mirror")

STAT_RULES: Dict[str, CombineKind] = {
    "HP": CombineKind.MULTIPLICATIVE,
    "Damage": CombineKind.MULTIPLICATIVE,
    "Cooldown": CombineKind.ADDITIVE_FLOORED,
    "CritChance": CombineKind.ADDITIVE_CAPPED,
    "EvadeChance": CombineKind.ADDITIVE_CAPPED,
    "Accuracy": CombineKind.ADDITIVE_CAPPED,
    "CritDamageCoeff": CombineKind.CRIT_COEFFICIENT,
    "Lifesteal": CombineKind.LIFESTEAL,
    "Knockback": CombineKind.ADDITIVE,
}
STAT_RULES.update({tag: CombineKind.TAG_APPEND for tag in ATTACK_EFFECT_TAGS})

# Effect keys that write to differently named bag fields
EFFECT_TARGETS: Dict[str, Tuple[str, ...]] = {
    "CritDamageCoeff": ("CritDamage",),
    "Lifesteal": ("AttackEffectLifesteal",),
}
EFFECT_TARGETS.update({tag: ("AttackEffect", "AttackEffectType") for tag in ATTACK_EFFECT_TAGS})


def _multiplicative(current: StatValue, effect: Effect) -> StatValue:
    if is_number(current) and is_number(effect.amount):
        return float(current) * (1 + effect.amount)
    return current


def _additive_floored(current: StatValue, effect: Effect) -> StatValue:
    if is_number(current) and is_number(effect.amount):
        return max(COOLDOWN_FLOOR, float(current) + effect.amount)
    return current


def _additive_capped(current: StatValue, effect: Effect) -> StatValue:
    if not is_number(effect.amount):
        return current
    if is_unavailable(current):
        base = 0.0
    elif is_number(current):
        base = float(current)
    else:
        return current
    return min(PROBABILITY_CAP, base + effect.amount)


def _crit_coefficient(current: StatValue, effect: Effect) -> StatValue:
    if not is_number(effect.amount):
        return current
    if is_number(current):
        return float(current) * (1 + effect.amount)
    if is_unavailable(current):
        return 1 + effect.amount
    return current


def _lifesteal(current: StatValue, effect: Effect) -> StatValue:
    if is_number(effect.amount):
        delta = float(effect.amount)
    elif is_number(effect.chance):
        delta = effect.chance * 100
    else:
        return current
    if is_number(current):
        return float(current) + delta
    if is_unavailable(current):
        return delta
    return current


def _additive(current: StatValue, effect: Effect) -> StatValue:
    if not is_number(effect.amount):
        return current
    if is_number(current):
        return float(current) + effect.amount
    if is_unavailable(current):
        return float(effect.amount)
    return current


def split_tags(value: StatValue) -> List[str]:
    if not isinstance(value, str):
        return []
    return [t.strip() for t in value.split(",") if t.strip()]


def _tag_append(current: StatValue, effect: Effect) -> StatValue:
    tags = split_tags(current)
    if effect.stat in tags:
        return current
    return ", ".join(tags + [effect.stat])


TRANSFORMS: Dict[CombineKind, Callable[[StatValue, Effect], StatValue]] = {
    CombineKind.MULTIPLICATIVE: _multiplicative,
    CombineKind.ADDITIVE_FLOORED: _additive_floored,
    CombineKind.ADDITIVE_CAPPED: _additive_capped,
    CombineKind.CRIT_COEFFICIENT: _crit_coefficient,
    CombineKind.LIFESTEAL: _lifesteal,
    CombineKind.ADDITIVE: _additive,
    CombineKind.TAG_APPEND: _tag_append,
}


def effect_targets(stat: str) -> Tuple[str, ...]:
    return EFFECT_TARGETS.get(stat, (stat,))


def apply_effect(bag: StatBag, effect: Effect) -> StatBag:
    kind = STAT_RULES.get(effect.stat)
    if kind is None:
        logger.debug("no rule for effect stat %s; skipped", effect.stat)
        return bag

    transform = TRANSFORMS[kind]
    changes: Dict[str, StatValue] = {}
    for key in effect_targets(effect.stat):
        if key not in bag:
            continue
        current = bag[key]
        new_value = transform(current, effect)
        if new_value is not current:
            changes[key] = new_value
    return bag.updated(changes)


def apply_mods(bag: StatBag, mods: Iterable[Mod]) -> StatBag:
    for mod in mods:
        for effect in mod.effects:
            bag = apply_effect(bag, effect)
    return bag
