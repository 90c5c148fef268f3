"""Unit tests for annuity math primitives"""

import pytest
from budget_planner.domain.annuity import (
    future_value_of_annuity,
    periods_to_reach,
    required_payment,
    round_currency,
)
from budget_planner.domain.exceptions import UnreachableGoal, UnrealisticTimeframe


def test_future_value_of_annuity_formula():
    """P * ((1 + r)^n - 1) / r"""
    assert future_value_of_annuity(1000, 0.01, 12) == pytest.approx(12682.50, abs=0.01)


def test_future_value_near_zero_rate_falls_back_to_simple_sum():
    assert future_value_of_annuity(1000, 0.00005, 12) == 12000
    assert future_value_of_annuity(1000, 0.0, 12) == 12000


def test_required_payment_near_zero_rate():
    assert required_payment(12000, 0.0, 12) == 1000


@pytest.mark.parametrize("payment", [500, 12_150, 40_000])
@pytest.mark.parametrize("rate", [0.0, 0.005, 0.0075, 0.01])
@pytest.mark.parametrize("months", [3, 36, 240])
def test_required_payment_inverts_future_value(payment, rate, months):
    """Round trip: payment -> future value -> payment"""
    fv = future_value_of_annuity(payment, rate, months)
    assert required_payment(fv, rate, months) == pytest.approx(payment, rel=1e-9)


def test_periods_to_reach_matches_future_value():
    months = periods_to_reach(5_000_000, 0.0075, 25_000)
    assert months == pytest.approx(122.63, abs=0.01)
    assert future_value_of_annuity(25_000, 0.0075, months) == pytest.approx(5_000_000, rel=1e-9)


def test_periods_to_reach_near_zero_rate():
    assert periods_to_reach(12_000, 0.0, 1000) == 12


def test_periods_to_reach_rejects_non_positive_payment():
    with pytest.raises(UnreachableGoal):
        periods_to_reach(100_000, 0.0075, 0)


def test_periods_to_reach_rejects_non_positive_ratio():
    with pytest.raises(UnreachableGoal):
        periods_to_reach(-100_000, 0.0075, 1000)


def test_periods_to_reach_beyond_fifty_years():
    """ln(5e6 * 0.0075 / 100 + 1) / ln(1.0075) is roughly 793 months"""
    with pytest.raises(UnrealisticTimeframe):
        periods_to_reach(5_000_000, 0.0075, 100)


def test_future_value_overflow_is_unrealistic():
    with pytest.raises(UnrealisticTimeframe):
        future_value_of_annuity(100, 1.0, 5000)


def test_round_currency_is_half_up():
    assert round_currency(2.5) == 3
    assert round_currency(3.5) == 4
    assert round_currency(12149.89) == 12150
    assert round_currency(0.49) == 0
