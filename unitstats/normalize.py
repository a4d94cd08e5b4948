from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .mod_effects import Effect, Mod
from .stats import (
    NUMERIC_KEYS,
    STAT_KEYS,
    TEXT_KEYS,
    UNAVAILABLE,
    StatBag,
    StatValue,
    is_number,
)

logger = logging.getLogger(__name__)

NA_TEXT = "N/A"


@dataclass(frozen=True)
class Unit:
    id: str
    label: str
    unit_class: str
    rarity: str
    base: StatBag
    community_ranking: StatValue = UNAVAILABLE
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)


def convert_cell(value: Any) -> StatValue:
    if value is None:
        return UNAVAILABLE
    if is_number(value):
        return float(value)
    text = str(value).strip()
    if not text or text.upper() == NA_TEXT:
        return UNAVAILABLE
    try:
        number = float(text)
    except ValueError:
        return text
    return number if is_number(number) else text


def _numeric_cell(value: Any) -> StatValue:
    converted = convert_cell(value)
    if isinstance(converted, str):
        # Text in a numeric column carries no usable number
        logger.debug("non-numeric value %r in numeric column", value)
        return UNAVAILABLE
    return converted


def _optional_number(value: Any) -> Optional[float]:
    converted = convert_cell(value)
    return float(converted) if is_number(converted) else None


def _text(row: Dict[str, Any], key: str) -> str:
    return str(row.get(key) or "").strip()


def unit_from_row(row: Dict[str, Any]) -> Unit:
    label = _text(row, "Label")
    unit_class = _text(row, "Class")
    rarity = _text(row, "Rarity")

    values: Dict[str, StatValue] = {"Label": label, "Class": unit_class, "Rarity": rarity}
    for key in NUMERIC_KEYS:
        values[key] = _numeric_cell(row.get(key))
    for key in TEXT_KEYS:
        text = _text(row, key)
        values[key] = UNAVAILABLE if not text or text.upper() == NA_TEXT else text

    known = set(STAT_KEYS) | {"UnitName", "CommunityRanking"}
    extra = {k: v for k, v in row.items() if k not in known}

    return Unit(
        id=_text(row, "UnitName") or label,
        label=label,
        unit_class=unit_class,
        rarity=rarity,
        base=StatBag(values),
        community_ranking=convert_cell(row.get("CommunityRanking")),
        extra=extra,
    )


def normalize_units(rows: List[Dict[str, Any]]) -> List[Unit]:
    units: List[Unit] = []
    for row in rows:
        unit = unit_from_row(row)
        if not unit.id:
            logger.warning("skipping unit row without UnitName or Label: %r", row)
            continue
        units.append(unit)
    return units


def effect_from_row(row: Dict[str, Any]) -> Optional[Effect]:
    stat = _text(row, "Stat")
    if not stat or stat.upper() == NA_TEXT:
        return None
    return Effect(
        stat=stat,
        amount=_optional_number(row.get("Amount")),
        chance=_optional_number(row.get("Chance")),
    )


def normalize_mods(rows: List[Dict[str, Any]]) -> List[Mod]:
    """Group mod rows by ModName; each row contributes one effect, in order."""
    order: List[str] = []
    grouped: Dict[str, Tuple[Dict[str, Any], List[Effect]]] = {}

    for row in rows:
        mod_id = _text(row, "ModName")
        if not mod_id:
            logger.warning("skipping mod row without ModName: %r", row)
            continue
        if mod_id not in grouped:
            order.append(mod_id)
            grouped[mod_id] = (row, [])
        effect = effect_from_row(row)
        if effect is not None:
            grouped[mod_id][1].append(effect)

    mods: List[Mod] = []
    for mod_id in order:
        first, effects = grouped[mod_id]
        description = _text(first, "Effect")
        mods.append(
            Mod(
                id=mod_id,
                label=_text(first, "Title") or mod_id,
                rarity=_text(first, "Rarity"),
                effects=tuple(effects),
                description="" if description.upper() == NA_TEXT else description,
            )
        )
    return mods


def unit_to_row(unit: Unit) -> Dict[str, Any]:
    row: Dict[str, Any] = {"UnitName": unit.id, "CommunityRanking": str(unit.community_ranking)}
    for key in STAT_KEYS:
        value = unit.base.get(key, UNAVAILABLE)
        row[key] = value if is_number(value) else str(value)
    return row
