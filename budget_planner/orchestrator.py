"""
Planning orchestrator - composes the numeric engine with the narrative service.

Flows:
1. Life event plan: validate -> feasibility -> allocation (if feasible)
   -> seed -> narrative (with retries) -> merged plan
2. Health score: 50/30/20 score, optionally enriched with narrative text

Numbers are always computed locally. The narrative service only supplies
prose, and when it is unavailable a deterministic fallback text is used so
the numeric result is still returned.
"""

import logging
from dataclasses import asdict, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from budget_planner.domain.allocation import AllocationPlanner
from budget_planner.domain.exceptions import NarrativeError, RetriesExhausted
from budget_planner.domain.feasibility import FeasibilityEngine, PlanLimits, validate_plan_request
from budget_planner.domain.health_score import HealthScoreCalculator
from budget_planner.domain.models import (
    FeasibilityResult,
    HealthScoreResult,
    LifeEventPlan,
    PlanRequest,
    Transaction,
)
from budget_planner.domain.seed import compute_context_seed, compute_seed
from budget_planner.infrastructure.clients.narrative import NarrativeGenerator
from budget_planner.infrastructure.observability.metrics import (
    narrative_fallback_counter,
    record_health_score,
)
from budget_planner.infrastructure.resilience import ResilientInvoker, classify_narrative_error

LIFE_EVENT_FLOW = "life_event_plan"
HEALTH_SCORE_FLOW = "health_score"

MARKET_RISK_DISCLAIMER = (
    "Market-linked returns are not guaranteed, so review the plan periodically."
)


class PlanningOrchestrator:
    """Entry point for life event planning and financial health scoring"""

    def __init__(
        self,
        narrator: NarrativeGenerator,
        invoker: Optional[ResilientInvoker] = None,
        feasibility_engine: Optional[FeasibilityEngine] = None,
        allocation_planner: Optional[AllocationPlanner] = None,
        health_calculator: Optional[HealthScoreCalculator] = None,
        limits: PlanLimits = PlanLimits(),
        max_attempts: int = 3,
    ):
        self.narrator = narrator
        self.invoker = invoker or ResilientInvoker()
        self.feasibility_engine = feasibility_engine or FeasibilityEngine()
        self.allocation_planner = allocation_planner or AllocationPlanner()
        self.health_calculator = health_calculator or HealthScoreCalculator()
        self.limits = limits
        self.max_attempts = max_attempts

    async def plan_life_event(self, request: PlanRequest) -> LifeEventPlan:
        """
        Build a complete plan for a savings goal.

        Raises:
            InvalidInput: Request failed validation
            UnreachableGoal, UnrealisticTimeframe: Goal cannot be solved within 50 years
        """
        validate_plan_request(request, self.limits)
        feasibility = self.feasibility_engine.assess(request)

        monthly_savings = None
        allocations = None
        if feasibility.is_feasible:
            monthly_savings = feasibility.required_monthly_savings
            allocations = self.allocation_planner.plan(
                monthly_savings, request.years, request.target_amount
            )

        seed = compute_seed(request.goal, request.target_amount, request.years, request.monthly_income)

        plan = LifeEventPlan(
            plan_title=_plan_title(request, feasibility),
            seed=seed,
            is_feasible=feasibility.is_feasible,
            feasibility=feasibility,
            summary="",
            monthly_savings=monthly_savings,
            investment_allocations=allocations,
        )

        summary, used_fallback = await self._narrate(
            LIFE_EVENT_FLOW,
            _plan_context(request, plan),
            seed,
            fallback=_fallback_plan_summary(request, plan),
        )
        plan.summary = summary
        plan.narrative_fallback = used_fallback
        return plan

    def score_financial_health(self, transactions: Iterable[Transaction]) -> HealthScoreResult:
        """Pure 50/30/20 score with deterministic summary text"""
        result = self.health_calculator.score(transactions)
        record_health_score(result.score)
        return result

    async def review_financial_health(self, transactions: Iterable[Transaction]) -> HealthScoreResult:
        """Score plus a narrative summary; zero-income results skip the narrative call"""
        result = self.score_financial_health(transactions)
        if result.total_income <= 0:
            return result

        context = {
            "kind": HEALTH_SCORE_FLOW,
            "score": result.score,
            "needs_percentage": result.needs_percentage,
            "wants_percentage": result.wants_percentage,
            "savings_and_debt_percentage": result.savings_and_debt_percentage,
            "total_income": result.total_income,
        }
        summary, _ = await self._narrate(
            HEALTH_SCORE_FLOW, context, compute_context_seed(context), fallback=result.summary
        )
        return replace(result, summary=summary)

    async def _narrate(self, flow: str, context: Dict[str, Any], seed: str, fallback: str) -> Tuple[str, bool]:
        """Returns (text, used_fallback)"""
        try:
            text = await self.invoker.invoke(
                lambda: self.narrator.generate_narrative(context, seed),
                self.max_attempts,
                classify_narrative_error,
            )
            return text, False
        except (RetriesExhausted, NarrativeError) as e:
            narrative_fallback_counter.labels(flow=flow).inc()
            logging.warning(
                f"Narrative unavailable, using fallback text: {e}",
                extra={"flow": flow, "seed": seed},
            )
            return fallback, True


def _plan_title(request: PlanRequest, feasibility: FeasibilityResult) -> str:
    if feasibility.is_feasible:
        return f"Your Plan for {request.goal.strip()}"
    return "Feasibility Report for Your Goal"


def _plan_context(request: PlanRequest, plan: LifeEventPlan) -> Dict[str, Any]:
    feasibility = plan.feasibility
    context: Dict[str, Any] = {
        "kind": LIFE_EVENT_FLOW,
        "goal": request.goal,
        "target_amount": request.target_amount,
        "years": request.years,
        "monthly_income": request.monthly_income,
        "is_feasible": plan.is_feasible,
        "required_monthly_savings": feasibility.required_monthly_savings,
        "max_affordable_savings": feasibility.max_affordable_savings,
    }
    if plan.is_feasible:
        context["monthly_savings"] = plan.monthly_savings
        context["investment_allocations"] = [asdict(a) for a in plan.investment_allocations]
    else:
        context["minimum_feasible_timeframe_months"] = feasibility.minimum_feasible_timeframe_months
        context["minimum_feasible_timeframe"] = feasibility.minimum_feasible_timeframe
        context["calculation_breakdown"] = list(feasibility.calculation_breakdown)
    return context


def _fallback_plan_summary(request: PlanRequest, plan: LifeEventPlan) -> str:
    feasibility = plan.feasibility
    if plan.is_feasible:
        return (
            f"Saving ₹{plan.monthly_savings:,} a month across {len(plan.investment_allocations)} "
            f"investments keeps your goal of ₹{request.target_amount:,.0f} for {request.goal.strip()} "
            f"on track. {MARKET_RISK_DISCLAIMER}"
        )
    return (
        f"Your goal needs ₹{feasibility.required_monthly_savings:,} a month, more than the "
        f"₹{feasibility.max_affordable_savings:,} you can comfortably save. At that amount you can "
        f"reach ₹{request.target_amount:,.0f} in about {feasibility.minimum_feasible_timeframe}. "
        f"{MARKET_RISK_DISCLAIMER}"
    )
