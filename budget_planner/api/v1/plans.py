"""POST /v1/plans/life-event - Savings plan for a life event goal"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from budget_planner.api.v1.schemas import (
    FeasibilityAnalysisSchema,
    InvestmentAllocationSchema,
    LifeEventPlanRequest,
    LifeEventPlanResponse,
)
from budget_planner.api.dependencies import get_orchestrator, get_request_id
from budget_planner.domain.exceptions import InvalidInput, UnreachableGoal, UnrealisticTimeframe
from budget_planner.domain.models import LifeEventPlan, PlanRequest
from budget_planner.infrastructure.observability.logging import log_plan_outcome
from budget_planner.infrastructure.observability.metrics import record_plan
from budget_planner.orchestrator import PlanningOrchestrator

router = APIRouter()


@router.post("/plans/life-event", response_model=LifeEventPlanResponse)
async def create_life_event_plan(
    request_body: LifeEventPlanRequest,
    request: Request,
    orchestrator: PlanningOrchestrator = Depends(get_orchestrator),
):
    """
    Plan savings and investments for a goal.

    Flow:
    1. Validate bounds (minimum amounts, timeframe, plausibility)
    2. Check required savings against 50% of income
    3. Allocate across instruments if feasible, else solve for a longer timeframe
    4. Attach narrative text (fallback text if the narrative service is down)
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        plan = await orchestrator.plan_life_event(
            PlanRequest(
                goal=request_body.goal,
                target_amount=request_body.target_amount,
                years=request_body.years,
                monthly_income=request_body.monthly_income,
            )
        )

    except InvalidInput as e:
        record_plan("rejected")
        logging.warning(f"Invalid plan request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except (UnreachableGoal, UnrealisticTimeframe) as e:
        record_plan("rejected")
        logging.warning(f"Goal cannot be planned: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_plan("feasible" if plan.is_feasible else "infeasible")
    log_plan_outcome(request_id, plan.seed, plan.is_feasible, plan.narrative_fallback, duration_ms)

    return to_response(plan)


def to_response(plan: LifeEventPlan) -> LifeEventPlanResponse:
    feasibility = plan.feasibility

    analysis = None
    if not plan.is_feasible:
        analysis = FeasibilityAnalysisSchema(
            minimum_feasible_timeframe_months=feasibility.minimum_feasible_timeframe_months,
            minimum_feasible_timeframe=feasibility.minimum_feasible_timeframe,
            calculation_breakdown=feasibility.calculation_breakdown,
        )

    allocations = None
    if plan.investment_allocations is not None:
        allocations = [
            InvestmentAllocationSchema(
                instrument_type=a.instrument_type,
                allocation_percent=a.allocation_percent,
                estimated_return_range=a.estimated_return_range,
                monthly_investment=a.monthly_investment,
                future_value=a.future_value,
                description=a.description,
            )
            for a in plan.investment_allocations
        ]

    return LifeEventPlanResponse(
        plan_title=plan.plan_title,
        seed=plan.seed,
        is_feasible=plan.is_feasible,
        required_monthly_savings=feasibility.required_monthly_savings,
        max_affordable_savings=feasibility.max_affordable_savings,
        feasibility_analysis=analysis,
        monthly_savings=plan.monthly_savings,
        investment_allocations=allocations,
        summary=plan.summary,
        narrative_fallback=plan.narrative_fallback,
    )
