"""Feasibility engine - can the user save enough for the goal in time?"""

import math
from dataclasses import dataclass

from budget_planner.domain.annuity import (
    periods_to_reach,
    required_payment,
    round_currency,
)
from budget_planner.domain.exceptions import InvalidInput
from budget_planner.domain.models import FeasibilityResult, PlanRequest, format_timeframe


@dataclass(frozen=True)
class PlanLimits:
    """Bounds outside which a plan request is rejected as implausible"""

    min_target_amount: float = 1_000
    min_monthly_income: float = 5_000
    min_years: float = 0.25
    max_years: float = 50
    min_goal_length: int = 3
    # Target may not exceed income * 12 * years * this multiple
    max_income_multiple: float = 10


def validate_plan_request(request: PlanRequest, limits: PlanLimits = PlanLimits()) -> None:
    """
    Reject requests before any computation runs.

    Raises:
        InvalidInput: Naming the first violated bound
    """
    if not isinstance(request.goal, str) or len(request.goal.strip()) < limits.min_goal_length:
        raise InvalidInput(f"goal must be at least {limits.min_goal_length} characters long")

    for name in ("target_amount", "years", "monthly_income"):
        value = getattr(request, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInput(f"{name} must be a number")
        if not math.isfinite(value) or value <= 0:
            raise InvalidInput(f"{name} must be a finite number greater than 0")

    if request.target_amount < limits.min_target_amount:
        raise InvalidInput(f"target_amount must be at least {limits.min_target_amount:,.0f}")
    if request.monthly_income < limits.min_monthly_income:
        raise InvalidInput(f"monthly_income must be at least {limits.min_monthly_income:,.0f}")
    if request.years < limits.min_years:
        raise InvalidInput(f"years must be at least {limits.min_years}")
    if request.years > limits.max_years:
        raise InvalidInput(f"years must be at most {limits.max_years}")

    ceiling = request.monthly_income * 12 * request.years * limits.max_income_multiple
    if request.target_amount > ceiling:
        raise InvalidInput(
            f"target_amount exceeds {limits.max_income_multiple:g}x total income over the timeframe "
            f"({ceiling:,.0f})"
        )


class FeasibilityEngine:
    """
    Decide whether a goal fits within the affordability cap.

    Uses a single blended annual return for the check regardless of the
    instruments the allocation planner later picks.
    """

    def __init__(self, annual_return_rate: float = 0.09, affordability_ratio: float = 0.5):
        self.annual_return_rate = annual_return_rate
        self.affordability_ratio = affordability_ratio

    @property
    def monthly_rate(self) -> float:
        return self.annual_return_rate / 12

    def assess(self, request: PlanRequest) -> FeasibilityResult:
        """
        Compute required savings and, when unaffordable, the shortest reachable timeframe.

        Raises:
            UnreachableGoal, UnrealisticTimeframe: If even the maximum affordable
                savings cannot reach the target within 50 years
        """
        total_months = request.years * 12
        required = round_currency(
            required_payment(request.target_amount, self.monthly_rate, total_months)
        )
        max_affordable = round_currency(request.monthly_income * self.affordability_ratio)

        if required <= max_affordable:
            return FeasibilityResult(
                required_monthly_savings=required,
                max_affordable_savings=max_affordable,
                is_feasible=True,
            )

        new_months = math.ceil(
            periods_to_reach(request.target_amount, self.monthly_rate, max_affordable)
        )

        return FeasibilityResult(
            required_monthly_savings=required,
            max_affordable_savings=max_affordable,
            is_feasible=False,
            minimum_feasible_timeframe_months=new_months,
            calculation_breakdown=self._breakdown(request, required, max_affordable, new_months),
        )

    def _breakdown(self, request: PlanRequest, required: int, max_affordable: int, months: int) -> list[str]:
        return [
            f"Your goal requires saving ₹{required:,}/month, which is more than your "
            f"affordable limit of ₹{max_affordable:,}/month.",
            f"To make it achievable, monthly savings are capped at your maximum "
            f"affordable amount of ₹{max_affordable:,}.",
            f"Saving ₹{max_affordable:,}/month at an assumed average return of "
            f"{self.annual_return_rate * 100:g}%/year, the new minimum timeframe to reach "
            f"₹{request.target_amount:,.0f} is approximately {format_timeframe(months)}.",
        ]
