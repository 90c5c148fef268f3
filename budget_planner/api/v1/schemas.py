"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field, model_validator
from datetime import date
from typing import List, Literal, Optional


class LifeEventPlanRequest(BaseModel):
    """Request body for POST /v1/plans/life-event"""

    goal: str = Field(..., min_length=1, description="What the user is saving for")
    target_amount: float = Field(..., gt=0, allow_inf_nan=False, description="Amount needed, in INR")
    years: float = Field(..., gt=0, allow_inf_nan=False, description="Timeframe in years (fractions allowed)")
    monthly_income: float = Field(..., gt=0, allow_inf_nan=False, description="Monthly income, in INR")


class InvestmentAllocationSchema(BaseModel):
    """Single instrument in an investment plan"""

    instrument_type: str
    allocation_percent: int
    estimated_return_range: str
    monthly_investment: int
    future_value: float
    description: str


class FeasibilityAnalysisSchema(BaseModel):
    """Present only when the goal is infeasible in the requested timeframe"""

    minimum_feasible_timeframe_months: int
    minimum_feasible_timeframe: str
    calculation_breakdown: List[str]


class LifeEventPlanResponse(BaseModel):
    """Response for POST /v1/plans/life-event"""

    plan_title: str
    seed: str
    is_feasible: bool
    required_monthly_savings: int
    max_affordable_savings: int
    feasibility_analysis: Optional[FeasibilityAnalysisSchema] = None
    monthly_savings: Optional[int] = None
    investment_allocations: Optional[List[InvestmentAllocationSchema]] = None
    summary: str
    narrative_fallback: bool


class TransactionSchema(BaseModel):
    """Single income or expense record"""

    date: date
    type: Literal["income", "expense"]
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    category: Optional[str] = None
    description: str = ""


class HealthScoreRequest(BaseModel):
    """Request body for POST /v1/health-score"""

    transactions: Optional[List[TransactionSchema]] = None
    transaction_history: Optional[str] = Field(
        None, description="One transaction per line, as exported by the dashboard"
    )

    @model_validator(mode="after")
    def require_one_source(self):
        if (self.transactions is None) == (self.transaction_history is None):
            raise ValueError("Provide exactly one of transactions or transaction_history")
        return self


class CalculationDetails(BaseModel):
    """Raw totals and percentages behind the score"""

    total_income: float
    total_expenses: float
    needs_spending: float
    wants_spending: float
    savings_and_debt: float
    needs_percentage: float
    wants_percentage: float
    savings_and_debt_percentage: float
    needs_target: float
    wants_target: float
    savings_target: float


class HealthScoreResponse(BaseModel):
    """Response for POST /v1/health-score"""

    score: int
    summary: str
    strengths: List[str]
    areas_for_improvement: List[str]
    calculation_details: CalculationDetails
