"""Shared fixtures for the unit stats test suite."""

from pathlib import Path
from typing import Any, Dict

import pytest

from unitstats.game_data import load_game_data
from unitstats.mod_effects import Effect, Mod
from unitstats.normalize import Unit, unit_from_row
from unitstats.sheet_ingest import load_mods_csv, load_units_csv

FIXTURES_DIR = Path(__file__).parent / "fixtures"
UNITS_CSV = FIXTURES_DIR / "units_sample.csv"
MODS_CSV = FIXTURES_DIR / "mods_sample.csv"


def make_unit(
    unit_class: str = "Warrior",
    rarity: str = "Rare",
    label: str = "Test Unit",
    **stats: Any,
) -> Unit:
    """Build a unit whose unspecified stats are unavailable."""
    row: Dict[str, Any] = {"UnitName": label.lower().replace(" ", "_"), "Label": label}
    row["Class"] = unit_class
    row["Rarity"] = rarity
    row.update(stats)
    return unit_from_row(row)


def make_mod(mod_id: str, rarity: str, *effects: Effect) -> Mod:
    return Mod(id=mod_id, label=mod_id, rarity=rarity, effects=tuple(effects))


@pytest.fixture(scope="session")
def game_data():
    return load_game_data()


@pytest.fixture(scope="session")
def units():
    return load_units_csv(UNITS_CSV)


@pytest.fixture(scope="session")
def mods():
    return load_mods_csv(MODS_CSV)


@pytest.fixture
def units_by_id(units):
    return {u.id: u for u in units}


@pytest.fixture
def mods_by_id(mods):
    return {m.id: m for m in mods}
