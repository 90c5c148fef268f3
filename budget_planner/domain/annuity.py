"""Annuity math primitives for monthly savings plans"""

import math

from budget_planner.domain.exceptions import UnreachableGoal, UnrealisticTimeframe

# Below this monthly rate the closed-form formulas divide by a near-zero value
NEAR_ZERO_RATE = 1e-4

MAX_TIMEFRAME_MONTHS = 600  # 50 years


def round_currency(amount: float) -> int:
    """Round half-up to the nearest whole currency unit"""
    return int(math.floor(amount + 0.5))


def future_value_of_annuity(payment: float, monthly_rate: float, total_months: float) -> float:
    """
    Future value of an ordinary annuity: P * ((1 + r)^n - 1) / r.

    Raises:
        UnrealisticTimeframe: If compounding overflows
    """
    if monthly_rate < NEAR_ZERO_RATE:
        return payment * total_months

    try:
        growth = math.pow(1 + monthly_rate, total_months)
    except OverflowError as e:
        raise UnrealisticTimeframe("Compounding overflowed for the requested timeframe") from e

    value = payment * (growth - 1) / monthly_rate
    if not math.isfinite(value):
        raise UnrealisticTimeframe("Future value is not a finite number")
    return value


def required_payment(target_future_value: float, monthly_rate: float, total_months: float) -> float:
    """Monthly payment needed to accumulate target_future_value after total_months"""
    if total_months <= 0:
        raise UnrealisticTimeframe("Timeframe must be at least one month")

    if monthly_rate < NEAR_ZERO_RATE:
        return target_future_value / total_months

    try:
        growth = math.pow(1 + monthly_rate, total_months)
        payment = target_future_value * monthly_rate / (growth - 1)
    except (OverflowError, ZeroDivisionError) as e:
        raise UnrealisticTimeframe("Could not solve for the monthly payment") from e

    if not math.isfinite(payment):
        raise UnrealisticTimeframe("Monthly payment is not a finite number")
    return payment


def periods_to_reach(target_future_value: float, monthly_rate: float, payment: float) -> float:
    """
    Number of monthly payments needed to reach target_future_value.

    Solves n = ln(FV * r / P + 1) / ln(1 + r).

    Raises:
        UnreachableGoal: If the payment can never accumulate the target
        UnrealisticTimeframe: If the result is non-finite or above 600 months
    """
    if payment <= 0:
        raise UnreachableGoal("Monthly savings must be positive to reach the goal")

    if monthly_rate < NEAR_ZERO_RATE:
        months = target_future_value / payment
    else:
        ratio = target_future_value * monthly_rate / payment
        if not ratio > 0:
            raise UnreachableGoal("Goal cannot be reached with the available monthly savings")
        try:
            months = math.log(ratio + 1) / math.log(1 + monthly_rate)
        except (ValueError, ZeroDivisionError, OverflowError) as e:
            raise UnrealisticTimeframe("Could not solve for the timeframe") from e

    if not math.isfinite(months) or months > MAX_TIMEFRAME_MONTHS:
        raise UnrealisticTimeframe(
            f"Reaching the goal would take longer than {MAX_TIMEFRAME_MONTHS // 12} years"
        )
    return months
