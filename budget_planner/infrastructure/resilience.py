"""Retry with capped exponential backoff and jitter for flaky external calls"""

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from budget_planner.domain.exceptions import (
    DomainException,
    NarrativeOverloadedError,
    RetriesExhausted,
)
from budget_planner.infrastructure.observability.metrics import narrative_attempt_failures_counter

T = TypeVar("T")

_OVERLOAD_MARKERS = ("503", "429", "overloaded", "rate limit", "too many requests")


class RetryDecision(str, Enum):
    RETRYABLE = "retryable"
    FATAL = "fatal"


@dataclass(frozen=True)
class BackoffPolicy:
    """Delay before retry n: min(cap, base * 2^n) + uniform(0, jitter)"""

    base_seconds: float = 1.0
    cap_seconds: float = 8.0
    jitter_seconds: float = 0.5

    def delay_for(self, attempt: int, rng: random.Random) -> float:
        backoff = min(self.cap_seconds, self.base_seconds * (2 ** attempt))
        return backoff + rng.uniform(0, self.jitter_seconds)


def classify_narrative_error(error: BaseException) -> RetryDecision:
    """Overload and rate-limit signals are retryable, everything else is fatal"""
    if isinstance(error, NarrativeOverloadedError):
        return RetryDecision.RETRYABLE
    if isinstance(error, DomainException):
        return RetryDecision.FATAL

    message = str(error).lower()
    if any(marker in message for marker in _OVERLOAD_MARKERS):
        return RetryDecision.RETRYABLE
    return RetryDecision.FATAL


class ResilientInvoker:
    """
    Execute an async operation with bounded retries.

    Retry strategy:
    - Fatal errors propagate immediately, even on the first attempt
    - Retryable errors sleep 2s, 4s, 8s... (capped, plus jitter) between attempts
    - Exhausting max_attempts raises RetriesExhausted chained to the last error
    """

    def __init__(
        self,
        backoff: BackoffPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        self.backoff = backoff or BackoffPolicy()
        self._sleep = sleep
        self._rng = rng or random.Random()

    async def invoke(
        self,
        operation: Callable[[], Awaitable[T]],
        max_attempts: int,
        classify: Callable[[BaseException], RetryDecision],
    ) -> T:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        last_error: Exception | None = None
        for attempt in range(1, max_attempts + 1):
            try:
                return await operation()
            except Exception as e:
                decision = classify(e)
                narrative_attempt_failures_counter.labels(classification=decision.value).inc()

                if decision is RetryDecision.FATAL:
                    raise

                last_error = e
                if attempt >= max_attempts:
                    break

                delay = self.backoff.delay_for(attempt, self._rng)
                logging.warning(
                    f"Attempt {attempt} failed with retryable error, retrying in {delay:.2f}s",
                    extra={"attempt": attempt, "max_attempts": max_attempts, "error": str(e)},
                )
                await self._sleep(delay)

        raise RetriesExhausted(max_attempts, last_error) from last_error
