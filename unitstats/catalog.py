from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process, utils

from .game_data import RARITY_ORDER, rarity_rank
from .mod_effects import Mod
from .normalize import Unit
from .stats import StatValue, is_number, is_unavailable

FUZZY_MIN_SCORE = 60.0


def filter_units(
    units: Iterable[Unit],
    search: str = "",
    rarity: Optional[str] = None,
    unit_class: Optional[str] = None,
) -> List[Unit]:
    query = (search or "").strip().lower()
    out: List[Unit] = []
    for u in units:
        if query and query not in u.label.lower():
            continue
        if rarity and u.rarity != rarity:
            continue
        if unit_class and u.unit_class != unit_class:
            continue
        out.append(u)
    return out


def column_value(unit: Unit, column: str) -> StatValue:
    if column == "CommunityRanking":
        return unit.community_ranking
    if column == "UnitName":
        return unit.id
    return unit.base.get(column, unit.extra.get(column, ""))


def _sort_key(column: str, value: Any) -> Tuple[int, float, str]:
    if is_unavailable(value):
        return (0, 0.0, "")
    if column == "Rarity":
        return (1, float(rarity_rank(value)), "")
    if is_number(value):
        return (1, float(value), "")
    return (2, 0.0, str(value).lower())


def sort_units(units: Iterable[Unit], column: Optional[str], descending: bool = False) -> List[Unit]:
    """Sort by a column; unavailable values count as the smallest."""
    units = list(units)
    if not column:
        return units
    return sorted(units, key=lambda u: _sort_key(column, column_value(u, column)), reverse=descending)


def filter_options(units: Iterable[Unit]) -> Dict[str, List[str]]:
    units = list(units)
    rarities = sorted({u.rarity for u in units if u.rarity}, key=lambda r: (rarity_rank(r), r))
    classes = sorted({u.unit_class for u in units if u.unit_class})
    return {"rarities": rarities, "classes": classes}


def mods_by_rarity(mods: Iterable[Mod]) -> List[Tuple[str, List[Mod]]]:
    grouped: Dict[str, List[Mod]] = defaultdict(list)
    for m in mods:
        grouped[m.rarity].append(m)
    ordered = [r for r in RARITY_ORDER if grouped.get(r)]
    extras = sorted(r for r in grouped if r not in RARITY_ORDER)
    return [(r, grouped[r]) for r in ordered + extras]


def find_unit(units: Sequence[Unit], query: str) -> Optional[Unit]:
    q = (query or "").strip()
    if not q:
        return None
    for u in units:
        if u.id == q or u.label.lower() == q.lower():
            return u
    labels = [u.label for u in units]
    match = process.extractOne(
        q, labels, scorer=fuzz.WRatio, processor=utils.default_process, score_cutoff=FUZZY_MIN_SCORE
    )
    if match is None:
        return None
    return units[match[2]]


def find_mods(mods: Iterable[Mod], ids: Iterable[str]) -> List[Mod]:
    by_id = {m.id: m for m in mods}
    out: List[Mod] = []
    for mod_id in ids:
        if mod_id not in by_id:
            raise KeyError(mod_id)
        out.append(by_id[mod_id])
    return out
