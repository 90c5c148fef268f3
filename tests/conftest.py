"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from typing import Any, Callable, Dict, List
from fastapi.testclient import TestClient
from budget_planner.api.main import create_app
from budget_planner.api.dependencies import get_narrative_client, get_orchestrator
from budget_planner.domain.models import PlanRequest, Transaction
from budget_planner.infrastructure.resilience import BackoffPolicy, ResilientInvoker
from budget_planner.orchestrator import PlanningOrchestrator


class FakeNarrator:
    """Narrative generator that fails a scripted number of times before answering"""

    def __init__(self, failures: List[Exception] | None = None):
        self.failures = list(failures or [])
        self.calls: List[Dict[str, Any]] = []

    async def generate_narrative(self, context: Dict[str, Any], seed: str) -> str:
        self.calls.append({"context": context, "seed": seed})
        if self.failures:
            raise self.failures.pop(0)
        return f"narrative:{context['kind']}:{seed}"


async def no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def narrator_factory() -> Callable[..., FakeNarrator]:
    return FakeNarrator


@pytest.fixture
def fast_invoker() -> ResilientInvoker:
    """Invoker that never actually waits"""
    return ResilientInvoker(BackoffPolicy(base_seconds=1.0, cap_seconds=8.0, jitter_seconds=0.0), sleep=no_sleep)


@pytest.fixture
def orchestrator_factory(fast_invoker: ResilientInvoker) -> Callable[[FakeNarrator], PlanningOrchestrator]:
    def build(narrator: FakeNarrator) -> PlanningOrchestrator:
        return PlanningOrchestrator(narrator=narrator, invoker=fast_invoker, max_attempts=3)

    return build


@pytest.fixture
def narrator() -> FakeNarrator:
    return FakeNarrator()


@pytest.fixture
def client(narrator: FakeNarrator) -> TestClient:
    """Create FastAPI test client with a scripted narrative service"""
    app = create_app()
    app.dependency_overrides[get_narrative_client] = lambda: narrator
    return TestClient(app)


@pytest.fixture
def client_factory(orchestrator_factory) -> Callable[[FakeNarrator], TestClient]:
    """Test client whose orchestrator retries without sleeping"""

    def build(narrator: FakeNarrator) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator_factory(narrator)
        return TestClient(app)

    return build


@pytest.fixture
def car_request() -> PlanRequest:
    """Feasible short-term goal"""
    return PlanRequest(goal="Car", target_amount=500_000, years=3, monthly_income=80_000)


@pytest.fixture
def house_request() -> PlanRequest:
    """Goal that needs far more than half of income each month"""
    return PlanRequest(goal="House", target_amount=5_000_000, years=2, monthly_income=50_000)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """One month of income and spending that hits the 50/30/20 split exactly"""
    base_date = date.today().replace(day=1) - timedelta(days=30)
    return [
        Transaction(base_date, "income", 100_000, "Salary", "Monthly salary"),
        Transaction(base_date + timedelta(days=1), "expense", 30_000, "Rent", "Flat rent"),
        Transaction(base_date + timedelta(days=3), "expense", 12_000, "Groceries", "Weekly groceries"),
        Transaction(base_date + timedelta(days=5), "expense", 8_000, "Utilities", "Electricity and internet"),
        Transaction(base_date + timedelta(days=8), "expense", 18_000, "Food & Dining", "Restaurants"),
        Transaction(base_date + timedelta(days=12), "expense", 12_000, "Shopping", "Clothes"),
        Transaction(base_date + timedelta(days=15), "expense", 15_000, "EMI", "Car loan EMI"),
        Transaction(base_date + timedelta(days=20), "expense", 5_000, "Investment", "Mutual fund SIP"),
    ]
