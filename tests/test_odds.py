import pytest

from oddsdash.services.odds import (
    decimal_to_american,
    implied_probability,
    moneyline_to_decimal,
    select_best_price,
)


def test_moneyline_to_decimal():
    assert moneyline_to_decimal(150) == 2.5
    assert moneyline_to_decimal(-150) == pytest.approx(1.6667, abs=1e-4)
    assert moneyline_to_decimal(100) == 2.0
    assert moneyline_to_decimal("-110") == pytest.approx(1.9091, abs=1e-4)


@pytest.mark.parametrize("bad", [0, None, "", "abc", float("nan"), float("inf"), True])
def test_moneyline_to_decimal_invalid(bad):
    assert moneyline_to_decimal(bad) is None


def test_implied_probability():
    assert implied_probability(100) == 0.5
    assert implied_probability(-110) == pytest.approx(110 / 210)
    assert implied_probability(300) == 0.25
    assert implied_probability(0) is None
    assert implied_probability("n/a") is None


def test_decimal_to_american():
    assert decimal_to_american(2.5) == 150
    assert decimal_to_american(2.0) == 100
    assert decimal_to_american(1.5) == -200
    assert decimal_to_american(1.91) == -110
    assert decimal_to_american(1.0) is None
    assert decimal_to_american(0.5) is None
    assert decimal_to_american(None) is None


def test_best_price_picks_highest_payout():
    best = select_best_price([-110, None, 120, -105])
    assert best.value == 120
    assert best.decimal == pytest.approx(2.2)


def test_best_price_first_max_wins_and_skips_junk():
    best = select_best_price([float("nan"), 0, 150, 150.0, "x"])
    assert best.value == 150
    assert best.decimal == 2.5


def test_best_price_empty():
    best = select_best_price([None, None])
    assert best.value is None and best.decimal is None


@pytest.mark.parametrize("huge", [10**400, -(10**400), "1e400"])
def test_out_of_range_prices_are_null(huge):
    assert moneyline_to_decimal(huge) is None
    assert implied_probability(huge) is None
    assert decimal_to_american(huge) is None


def test_best_price_skips_out_of_range():
    best = select_best_price([10**400, 150])
    assert best.value == 150
