import pytest

from unitstats.render import format_stat, render_mods, render_unit_details, render_units_table
from unitstats.report import build_unit_report, build_units_table, to_jsonable
from unitstats.catalog import mods_by_rarity
from unitstats.stats import UNAVAILABLE


def test_report_at_level_one_has_no_modified(units_by_id, game_data) -> None:
    report = build_unit_report(units_by_id["knight"], 1, [], game_data)
    assert report["modified"] is None
    assert report["price"] == 150
    assert report["xp"] == 300
    assert report["roll"] == {"amount": 150, "is_for_gems": False}
    assert report["mods"] == []


def test_report_with_level_and_mods(units_by_id, mods_by_id, game_data) -> None:
    picked = [mods_by_id["ModOfStrength"], mods_by_id["ModOfHealing"], mods_by_id["ModOfVitality"]]
    report = build_unit_report(units_by_id["knight"], 5, picked, game_data)
    assert report["level"] == 5
    assert report["modified"]["HP"] == pytest.approx(172.0 * 1.2)
    # only the last Common mod survives
    assert [m["id"] for m in report["mods"]] == ["ModOfHealing", "ModOfVitality"]
    assert report["base"]["HP"] == 100.0


def test_report_clamps_level(units_by_id, game_data) -> None:
    assert build_unit_report(units_by_id["knight"], 99, [], game_data)["level"] == 25


def test_to_jsonable_maps_unavailable_to_null(units_by_id, game_data) -> None:
    data = to_jsonable(build_unit_report(units_by_id["minstrel"], 1, [], game_data))
    assert data["community_ranking"] is None
    assert data["base"]["CritChance"] is None
    assert data["base"]["HP"] == 60.0
    assert data["price"] == 25


def test_units_table_rows(units, game_data) -> None:
    rows = build_units_table(units, 1, [], game_data)
    assert [r["id"] for r in rows] == ["knight", "archer", "shadow", "minstrel"]
    assert rows[0]["stats"] == units[0].base


@pytest.mark.parametrize(
    "key,value,expected",
    [
        ("CritChance", 0.1, "10.00%"),
        ("EvadeChance", 0.05, "5.00%"),
        ("HP", 100.0, "100.00"),
        ("Cooldown", 0.92, "0.92"),
        ("CommunityRanking", 3.0, "3"),
        ("AttackEffect", "Fire, Frost", "Fire, Frost"),
        ("HP", UNAVAILABLE, "N/A"),
    ],
)
def test_format_stat(key, value, expected) -> None:
    assert format_stat(key, value) == expected


def test_render_units_table(units, game_data) -> None:
    text = render_units_table(build_units_table(units, 1, [], game_data))
    lines = text.splitlines()
    assert lines[0].startswith("Label")
    assert set(lines[1]) <= {"-", " "}
    assert "Knight" in lines[2]
    assert "N/A" in lines[-1]
    assert render_units_table([]) == "No units match the current filters."


def test_render_unit_details(units_by_id, mods_by_id, game_data) -> None:
    report = build_unit_report(units_by_id["archer"], 5, [mods_by_id["ModOfFlame"]], game_data)
    text = render_unit_details(report)
    assert text.startswith("Archer Details")
    assert "Base Stats" in text
    assert "Modified Stats (level 5)" in text
    assert "  CritChance: 10.00%" in text
    assert "  AttackEffect: Poison, Fire" in text
    assert "mods: Mod of Flame" in text


def test_render_unit_details_base_only(units_by_id, game_data) -> None:
    text = render_unit_details(build_unit_report(units_by_id["knight"], 1, [], game_data))
    assert "Modified Stats" not in text
    assert "Price: 150 | XP: 300" in text


def test_render_mods(mods) -> None:
    text = render_mods(mods_by_rarity(mods))
    assert text.splitlines()[0] == "Common Mods"
    assert "- ModOfStrength: Mod of Strength (Increases Damage by 15%)" in text
    assert render_mods([]) == "No mods loaded."


def test_units_table_warns_once_for_conflicting_mods(units, game_data, caplog) -> None:
    from unitstats.mod_effects import Effect
    from tests.conftest import make_mod

    first = make_mod("first", "Rare", Effect("HP", amount=1.0))
    second = make_mod("second", "Rare", Effect("HP", amount=0.5))
    with caplog.at_level("WARNING", logger="unitstats.engine"):
        rows = build_units_table(units * 10, 1, [first, second], game_data)
    warnings = [r for r in caplog.records if "replaced by" in r.getMessage()]
    assert len(warnings) == 1
    assert rows[0]["stats"]["HP"] == pytest.approx(150.0)
