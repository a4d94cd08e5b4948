from unitstats.normalize import convert_cell, normalize_mods, unit_to_row
from unitstats.sheet_ingest import parse_csv
from unitstats.stats import STAT_KEYS, UNAVAILABLE
from tests.conftest import UNITS_CSV


def test_convert_cell() -> None:
    assert convert_cell("1.5") == 1.5
    assert convert_cell(" 3 ") == 3.0
    assert convert_cell("N/A") is UNAVAILABLE
    assert convert_cell("n/a") is UNAVAILABLE
    assert convert_cell("") is UNAVAILABLE
    assert convert_cell(None) is UNAVAILABLE
    assert convert_cell("Fire") == "Fire"
    assert convert_cell("nan") == "nan"


def test_malformed_rows_skipped(caplog) -> None:
    text = UNITS_CSV.read_text(encoding="utf-8")
    with caplog.at_level("WARNING"):
        rows = parse_csv(text, source="units")
    assert [r["UnitName"] for r in rows] == ["knight", "archer", "shadow", "minstrel"]
    assert "skipping malformed row 6" in caplog.text


def test_empty_csv() -> None:
    assert parse_csv("") == []
    assert parse_csv("   \n") == []
    assert parse_csv("A,B\n") == []


def test_quoted_commas_kept() -> None:
    rows = parse_csv('A,B\n"x, y",2\n')
    assert rows == [{"A": "x, y", "B": "2"}]


def test_units_from_fixture(units_by_id) -> None:
    knight = units_by_id["knight"]
    assert knight.label == "Knight"
    assert knight.unit_class == "Warrior"
    assert knight.community_ranking == 3.0
    assert knight.base["HP"] == 100.0
    assert knight.base["CritChance"] is UNAVAILABLE
    assert knight.base["AttackEffect"] is UNAVAILABLE
    assert set(knight.base) == set(STAT_KEYS)

    minstrel = units_by_id["minstrel"]
    assert minstrel.community_ranking is UNAVAILABLE
    assert units_by_id["archer"].base["AttackEffectKey"] == "poison_dot"


def test_text_in_numeric_column_is_unavailable() -> None:
    from tests.conftest import make_unit

    unit = make_unit(HP="lots")
    assert unit.base["HP"] is UNAVAILABLE


def test_mod_rows_grouped(mods_by_id) -> None:
    fury = mods_by_id["ModOfFury"]
    assert fury.rarity == "Ancient"
    assert fury.label == "Mod of Fury"
    assert fury.description == "Damage +30%, crit damage +50%"
    assert [(e.stat, e.amount) for e in fury.effects] == [("Damage", 0.3), ("CritDamageCoeff", 0.5)]

    leech = mods_by_id["ModOfLeech"].effects[0]
    assert leech.amount is None
    assert leech.chance == 0.2

    flame = mods_by_id["ModOfFlame"].effects[0]
    assert (flame.stat, flame.amount, flame.chance) == ("Fire", None, 0.25)


def test_mod_order_follows_first_appearance(mods) -> None:
    assert [m.id for m in mods][:3] == ["ModOfStrength", "ModOfVitality", "ModOfSwiftness"]
    assert len(mods) == 9


def test_mod_rows_without_name_or_stat() -> None:
    mods = normalize_mods(
        [
            {"ModName": "", "Rarity": "Rare", "Stat": "HP"},
            {"ModName": "Blank", "Rarity": "Rare", "Stat": "N/A", "Effect": "N/A"},
        ]
    )
    assert len(mods) == 1
    assert mods[0].effects == ()
    assert mods[0].description == ""
    assert mods[0].label == "Blank"


def test_unit_to_row(units_by_id) -> None:
    row = unit_to_row(units_by_id["knight"])
    assert row["UnitName"] == "knight"
    assert row["HP"] == 100.0
    assert row["CritChance"] == "N/A"
    assert row["CommunityRanking"] == "3.0"


def test_numeric_looking_text_columns_kept_verbatim() -> None:
    from tests.conftest import make_unit

    unit = make_unit(AttackEffectKey="12", AttackEffect="N/A", AttackEffectType="")
    assert unit.base["AttackEffectKey"] == "12"
    assert unit.base["AttackEffect"] is UNAVAILABLE
    assert unit.base["AttackEffectType"] is UNAVAILABLE
    assert unit_to_row(unit)["AttackEffectKey"] == "12"
