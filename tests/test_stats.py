import math

import pytest

from unitstats.stats import UNAVAILABLE, StatBag, is_number, is_unavailable


def test_unavailable_is_not_zero_or_text() -> None:
    assert UNAVAILABLE != 0
    assert UNAVAILABLE != "N/A"
    assert str(UNAVAILABLE) == "N/A"
    assert is_unavailable(UNAVAILABLE)
    assert not is_unavailable("N/A")


@pytest.mark.parametrize("value,expected", [(1, True), (0.5, True), (True, False), (math.nan, False), (math.inf, False), ("1", False), (None, False)])
def test_is_number(value, expected) -> None:
    assert is_number(value) is expected


def test_updated_returns_new_bag() -> None:
    bag = StatBag({"HP": 10.0, "Damage": UNAVAILABLE})
    out = bag.updated({"HP": 12.0})
    assert out["HP"] == 12.0
    assert bag["HP"] == 10.0
    assert out["Damage"] is UNAVAILABLE


def test_updated_without_changes_is_same_bag() -> None:
    bag = StatBag({"HP": 10.0})
    assert bag.updated({}) is bag


def test_bag_is_read_only() -> None:
    bag = StatBag({"HP": 10.0})
    with pytest.raises(TypeError):
        bag["HP"] = 1.0  # type: ignore[index]

