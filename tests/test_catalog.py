import pytest

from unitstats.catalog import (
    filter_options,
    filter_units,
    find_mods,
    find_unit,
    mods_by_rarity,
    sort_units,
)
from tests.conftest import make_mod


def _ids(units):
    return [u.id for u in units]


def test_filter_units(units) -> None:
    assert _ids(filter_units(units, search="SH")) == ["shadow"]
    assert _ids(filter_units(units, rarity="Epic")) == ["archer"]
    assert _ids(filter_units(units, unit_class="Warrior")) == ["knight"]
    assert _ids(filter_units(units, search="r", unit_class="Ranger")) == ["archer"]
    assert filter_units(units, rarity="Ancient") == []
    assert _ids(filter_units(units)) == _ids(units)


def test_sort_numeric(units) -> None:
    assert _ids(sort_units(units, "HP")) == ["minstrel", "shadow", "archer", "knight"]
    assert _ids(sort_units(units, "HP", descending=True)) == ["knight", "archer", "shadow", "minstrel"]


def test_unavailable_sorts_lowest(units) -> None:
    assert _ids(sort_units(units, "CritChance")) == ["knight", "minstrel", "archer", "shadow"]
    assert _ids(sort_units(units, "CritChance", descending=True)) == [
        "shadow",
        "archer",
        "knight",
        "minstrel",
    ]
    assert _ids(sort_units(units, "CommunityRanking")) == ["minstrel", "shadow", "archer", "knight"]


def test_sort_by_rarity_uses_tier_order(units) -> None:
    assert _ids(sort_units(units, "Rarity")) == ["minstrel", "knight", "archer", "shadow"]


def test_sort_text(units) -> None:
    assert _ids(sort_units(units, "Label")) == ["archer", "knight", "minstrel", "shadow"]
    assert _ids(sort_units(units, None)) == _ids(units)


def test_filter_options(units) -> None:
    options = filter_options(units)
    assert options["rarities"] == ["Common", "Rare", "Epic", "Legendary"]
    assert options["classes"] == ["Assassin", "Bard", "Ranger", "Warrior"]


def test_mods_grouped_by_rarity(mods) -> None:
    groups = mods_by_rarity(mods + [make_mod("odd", "Shiny")])
    assert [r for r, _ in groups] == [
        "Common",
        "Uncommon",
        "Rare",
        "Epic",
        "Legendary",
        "Mythic",
        "Demonic",
        "Ancient",
        "Shiny",
    ]
    assert [m.id for m in groups[0][1]] == ["ModOfStrength", "ModOfHealing"]


@pytest.mark.parametrize(
    "query,expected",
    [("knight", "knight"), ("Archer", "archer"), ("knigt", "knight"), ("SHADOW", "shadow")],
)
def test_find_unit(units, query, expected) -> None:
    assert find_unit(units, query).id == expected


def test_find_unit_no_match(units) -> None:
    assert find_unit(units, "zzzzzz") is None
    assert find_unit(units, "  ") is None


def test_find_mods_keeps_order(mods) -> None:
    picked = find_mods(mods, ["ModOfFury", "ModOfStrength"])
    assert [m.id for m in picked] == ["ModOfFury", "ModOfStrength"]
    assert find_mods(mods, []) == []
    with pytest.raises(KeyError):
        find_mods(mods, ["ModOfNothing"])
