"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from budget_planner.config import settings
from budget_planner.domain.feasibility import FeasibilityEngine
from budget_planner.infrastructure.clients.narrative import NarrativeClient, NarrativeGenerator
from budget_planner.infrastructure.resilience import BackoffPolicy, ResilientInvoker
from budget_planner.orchestrator import PlanningOrchestrator


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_narrative_client() -> NarrativeGenerator:
    """Provide narrative service client instance"""
    return NarrativeClient()


def get_orchestrator(narrator: NarrativeGenerator = Depends(get_narrative_client)) -> PlanningOrchestrator:
    """Wire the planning engine from settings"""
    invoker = ResilientInvoker(
        BackoffPolicy(
            base_seconds=settings.narrative_backoff_base,
            cap_seconds=settings.narrative_backoff_cap,
            jitter_seconds=settings.narrative_backoff_jitter,
        )
    )
    return PlanningOrchestrator(
        narrator=narrator,
        invoker=invoker,
        feasibility_engine=FeasibilityEngine(
            annual_return_rate=settings.blended_annual_return_rate,
            affordability_ratio=settings.affordability_ratio,
        ),
        max_attempts=settings.narrative_max_attempts,
    )
