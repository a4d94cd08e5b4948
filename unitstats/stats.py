"""Stat bag value type shared by every stage of the stat engine.

A stat bag maps a stat name to a number, a piece of text (identity fields and
attack-effect tags) or the ``UNAVAILABLE`` marker.  ``UNAVAILABLE`` means the
unit simply has no such stat; it is never confused with ``0`` or with the
literal text ``"N/A"``.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Tuple, Union


class Unavailable(Enum):
    NA = "N/A"

    def __str__(self) -> str:
        return "N/A"

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = Unavailable.NA

StatValue = Union[float, str, Unavailable]

COOLDOWN_FLOOR = 0.1
PROBABILITY_CAP = 1.0
MIN_LEVEL = 1
MAX_LEVEL = 25

IDENTITY_KEYS: Tuple[str, ...] = ("Label", "Class", "Rarity")

NUMERIC_KEYS: Tuple[str, ...] = (
    "HP",
    "Damage",
    "Cooldown",
    "Distance",
    "CritChance",
    "CritDamage",
    "AttackEffectLifesteal",
    "Knockback",
    "Accuracy",
    "EvadeChance",
    "HPOffset",
    "ShadowStepDistance",
    "ShadowStepCooldown",
)

TEXT_KEYS: Tuple[str, ...] = ("AttackEffect", "AttackEffectType", "AttackEffectKey")

STAT_KEYS: Tuple[str, ...] = IDENTITY_KEYS + NUMERIC_KEYS + TEXT_KEYS

PROBABILITY_KEYS = frozenset({"CritChance", "EvadeChance", "Accuracy"})


def is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and math.isfinite(value)


def is_unavailable(value: Any) -> bool:
    return value is UNAVAILABLE


class StatBag(Mapping[str, StatValue]):
    """Read-only mapping of stat name to value.

    Transformations go through :meth:`updated`, which returns a new bag and
    leaves the receiver untouched.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, StatValue] | None = None) -> None:
        self._values: Dict[str, StatValue] = dict(values or {})

    def __getitem__(self, key: str) -> StatValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"StatBag({self._values!r})"

    def updated(self, changes: Mapping[str, StatValue]) -> "StatBag":
        if not changes:
            return self
        merged = dict(self._values)
        merged.update(changes)
        return StatBag(merged)
