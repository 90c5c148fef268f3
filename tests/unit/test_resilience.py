"""Unit tests for retry with backoff"""

import random
import pytest
from budget_planner.domain.exceptions import (
    InvalidInput,
    NarrativeAPIError,
    NarrativeOverloadedError,
    NarrativeResponseError,
    RetriesExhausted,
)
from budget_planner.infrastructure.resilience import (
    BackoffPolicy,
    ResilientInvoker,
    RetryDecision,
    classify_narrative_error,
)


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class ScriptedOperation:
    """Raises the scripted errors in order, then returns 'ok'"""

    def __init__(self, *errors: Exception):
        self.errors = list(errors)
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def invoker(sleep: RecordingSleep) -> ResilientInvoker:
    return ResilientInvoker(BackoffPolicy(base_seconds=1.0, cap_seconds=8.0, jitter_seconds=0.0), sleep=sleep)


async def test_success_on_first_attempt(invoker, sleep):
    operation = ScriptedOperation()

    assert await invoker.invoke(operation, 3, classify_narrative_error) == "ok"
    assert operation.calls == 1
    assert sleep.delays == []


async def test_retries_retryable_errors_with_exponential_backoff(invoker, sleep):
    operation = ScriptedOperation(NarrativeOverloadedError("503"), NarrativeOverloadedError("503"))

    assert await invoker.invoke(operation, 3, classify_narrative_error) == "ok"
    assert operation.calls == 3
    assert sleep.delays == [2.0, 4.0]


async def test_exhausting_attempts_raises_retries_exhausted(invoker, sleep):
    last = NarrativeOverloadedError("third")
    operation = ScriptedOperation(NarrativeOverloadedError("first"), NarrativeOverloadedError("second"), last)

    with pytest.raises(RetriesExhausted) as exc_info:
        await invoker.invoke(operation, 3, classify_narrative_error)

    assert exc_info.value.attempts == 3
    assert exc_info.value.last_error is last
    assert exc_info.value.__cause__ is last
    assert operation.calls == 3
    assert sleep.delays == [2.0, 4.0]  # no sleep after the final attempt


async def test_fatal_error_is_never_retried(invoker, sleep):
    operation = ScriptedOperation(NarrativeResponseError("malformed"))

    with pytest.raises(NarrativeResponseError):
        await invoker.invoke(operation, 3, classify_narrative_error)

    assert operation.calls == 1
    assert sleep.delays == []


async def test_fatal_after_retryable_stops_immediately(invoker, sleep):
    operation = ScriptedOperation(NarrativeOverloadedError("503"), ValueError("bad payload"))

    with pytest.raises(ValueError):
        await invoker.invoke(operation, 5, classify_narrative_error)

    assert operation.calls == 2
    assert sleep.delays == [2.0]


async def test_single_attempt_with_retryable_error_is_exhausted(invoker, sleep):
    with pytest.raises(RetriesExhausted):
        await invoker.invoke(ScriptedOperation(NarrativeOverloadedError("429")), 1, classify_narrative_error)
    assert sleep.delays == []


async def test_invalid_max_attempts(invoker):
    with pytest.raises(ValueError):
        await invoker.invoke(ScriptedOperation(), 0, classify_narrative_error)


async def test_custom_classifier(invoker, sleep):
    operation = ScriptedOperation(KeyError("flaky"))

    result = await invoker.invoke(operation, 2, lambda e: RetryDecision.RETRYABLE)

    assert result == "ok"
    assert sleep.delays == [2.0]


def test_backoff_is_capped():
    policy = BackoffPolicy(base_seconds=1.0, cap_seconds=8.0, jitter_seconds=0.0)
    rng = random.Random(0)

    assert [policy.delay_for(n, rng) for n in range(1, 6)] == [2.0, 4.0, 8.0, 8.0, 8.0]


def test_backoff_jitter_stays_within_bounds():
    policy = BackoffPolicy(base_seconds=1.0, cap_seconds=8.0, jitter_seconds=0.5)
    rng = random.Random(42)

    for _ in range(100):
        assert 2.0 <= policy.delay_for(1, rng) <= 2.5


@pytest.mark.parametrize(
    "error, decision",
    [
        (NarrativeOverloadedError("busy"), RetryDecision.RETRYABLE),
        (RuntimeError("503 Service Unavailable"), RetryDecision.RETRYABLE),
        (RuntimeError("The model is overloaded. Please try again later."), RetryDecision.RETRYABLE),
        (RuntimeError("429 Too Many Requests"), RetryDecision.RETRYABLE),
        (NarrativeAPIError("Narrative API error: 500"), RetryDecision.FATAL),
        (NarrativeResponseError("Invalid narrative response"), RetryDecision.FATAL),
        (InvalidInput("rate limit must be positive"), RetryDecision.FATAL),
        (ValueError("bad"), RetryDecision.FATAL),
    ],
)
def test_classify_narrative_error(error, decision):
    assert classify_narrative_error(error) is decision
