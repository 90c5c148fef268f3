"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass(frozen=True)
class PlanRequest:
    """Savings goal submitted by the user"""

    goal: str
    target_amount: float
    years: float  # fractional years allowed
    monthly_income: float


@dataclass
class FeasibilityResult:
    """Outcome of checking required savings against the affordability cap"""

    required_monthly_savings: int
    max_affordable_savings: int
    is_feasible: bool
    # Populated only when the goal is infeasible
    minimum_feasible_timeframe_months: Optional[int] = None
    calculation_breakdown: Optional[List[str]] = None

    @property
    def minimum_feasible_timeframe(self) -> Optional[str]:
        if self.minimum_feasible_timeframe_months is None:
            return None
        return format_timeframe(self.minimum_feasible_timeframe_months)


@dataclass
class InvestmentAllocation:
    """One instrument's share of the monthly savings"""

    instrument_type: str
    allocation_percent: int
    estimated_return_range: str
    assumed_annual_return: float
    monthly_investment: int
    future_value: float
    description: str = ""


@dataclass
class LifeEventPlan:
    """Numeric plan merged with narrative text"""

    plan_title: str
    seed: str
    is_feasible: bool
    feasibility: FeasibilityResult
    summary: str
    narrative_fallback: bool = False
    # Populated only when the goal is feasible
    monthly_savings: Optional[int] = None
    investment_allocations: Optional[List[InvestmentAllocation]] = None


@dataclass(frozen=True)
class Transaction:
    """Income or expense record from the transaction source"""

    date: date
    type: str  # "income" or "expense"
    amount: float
    category: Optional[str] = None
    description: str = ""


@dataclass
class HealthScoreResult:
    """50/30/20 budget adherence score with its breakdown"""

    score: int
    needs_percentage: float
    wants_percentage: float
    savings_and_debt_percentage: float
    total_income: float
    needs_spending: float
    wants_spending: float
    savings_and_debt: float
    total_expenses: float
    needs_points: float
    wants_points: float
    savings_points: float
    needs_target: float
    wants_target: float
    savings_target: float
    summary: str
    strengths: List[str] = field(default_factory=list)
    areas_for_improvement: List[str] = field(default_factory=list)


def format_timeframe(total_months: int) -> str:
    """Render a month count as e.g. '10 years and 3 months'"""
    years, months = divmod(total_months, 12)
    year_label = "year" if years == 1 else "years"
    month_label = "month" if months == 1 else "months"
    return f"{years} {year_label} and {months} {month_label}"
