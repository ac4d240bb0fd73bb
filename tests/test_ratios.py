"""Tests for ratio parsing and rounding."""

import pytest

from food_usage_tracker.domain.ratios import (
    Ratio,
    RatioKind,
    parse_ratio,
    round_calories,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("0.25", 0.25),
        ("23.5%", 0.235),
        (" 10 % ", 0.1),
        ("1,200", 1200.0),
        ("150", 150.0),
        (0.5, 0.5),
        (3, 3.0),
    ],
)
def test_parse_ratio_values(raw: object, expected: float) -> None:
    assert parse_ratio(raw) == pytest.approx(expected)


@pytest.mark.parametrize(
    "raw", [None, "", "   ", "abc", "%", "abc%", "nan", "inf", True]
)
def test_parse_ratio_unparseable_is_none(raw: object) -> None:
    assert parse_ratio(raw) is None


def test_commas_are_not_stripped_in_percentages() -> None:
    assert parse_ratio("1,5%") is None


def test_one_is_absolute_and_below_one_is_percentage() -> None:
    assert Ratio.parse("1").kind is RatioKind.ABSOLUTE
    assert Ratio.parse("0.999").kind is RatioKind.PERCENTAGE
    assert Ratio.parse(None).kind is RatioKind.EMPTY
    assert Ratio.parse("garbage").is_empty


def test_percentage_allocation_scales_per_unit_calories() -> None:
    assert Ratio.parse("23.5%").allocate(per_unit=2000, quantity=1) == 470


def test_absolute_allocation_multiplies_quantity() -> None:
    assert Ratio.parse("150").allocate(per_unit=2000, quantity=10) == 1500


def test_ratio_of_one_allocates_quantity() -> None:
    assert Ratio.parse("1").allocate(per_unit=500, quantity=4) == 4
    assert Ratio.parse("0.999").allocate(per_unit=1000, quantity=1) == 999


def test_empty_ratio_allocates_nothing() -> None:
    assert Ratio.parse("").allocate(per_unit=1000, quantity=5) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.4, 2), (-2.5, -3), (469.99, 470)],
)
def test_round_calories_rounds_half_away_from_zero(
    value: float, expected: int
) -> None:
    assert round_calories(value) == expected


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_round_calories_rejects_non_finite(value: float) -> None:
    with pytest.raises(ValueError, match="out of range"):
        round_calories(value)
