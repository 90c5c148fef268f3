"""POST /v1/health-score - 50/30/20 financial health score"""

import time
from fastapi import APIRouter, Depends, Request

from budget_planner.api.v1.schemas import CalculationDetails, HealthScoreRequest, HealthScoreResponse
from budget_planner.api.dependencies import get_orchestrator, get_request_id
from budget_planner.domain.history import parse_transaction_history
from budget_planner.domain.models import Transaction
from budget_planner.infrastructure.observability.logging import log_health_score
from budget_planner.orchestrator import PlanningOrchestrator

router = APIRouter()


@router.post("/health-score", response_model=HealthScoreResponse)
async def score_financial_health(
    request_body: HealthScoreRequest,
    request: Request,
    orchestrator: PlanningOrchestrator = Depends(get_orchestrator),
):
    """
    Score budget adherence from transaction history.

    Accepts either structured transactions or the dashboard's line format.
    """
    start_time = time.time()

    if request_body.transaction_history is not None:
        transactions = parse_transaction_history(request_body.transaction_history)
    else:
        transactions = [
            Transaction(
                date=t.date,
                type=t.type,
                amount=t.amount,
                category=t.category,
                description=t.description,
            )
            for t in request_body.transactions
        ]

    result = await orchestrator.review_financial_health(transactions)

    duration_ms = (time.time() - start_time) * 1000
    log_health_score(get_request_id(request), result.score, len(transactions), duration_ms)

    return HealthScoreResponse(
        score=result.score,
        summary=result.summary,
        strengths=result.strengths,
        areas_for_improvement=result.areas_for_improvement,
        calculation_details=CalculationDetails(
            total_income=result.total_income,
            total_expenses=result.total_expenses,
            needs_spending=result.needs_spending,
            wants_spending=result.wants_spending,
            savings_and_debt=result.savings_and_debt,
            needs_percentage=result.needs_percentage,
            wants_percentage=result.wants_percentage,
            savings_and_debt_percentage=result.savings_and_debt_percentage,
            needs_target=result.needs_target,
            wants_target=result.wants_target,
            savings_target=result.savings_target,
        ),
    )
