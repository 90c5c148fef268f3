"""Prometheus metrics for monitoring plan outcomes, health scores, and narrative reliability"""

from prometheus_client import Counter, Histogram

# Planning metrics
plan_counter = Counter(
    "budget_planner_plan_total",
    "Total life event plans requested",
    ["outcome"],  # feasible | infeasible | rejected
)

health_score_histogram = Histogram(
    "budget_planner_health_score",
    "Distribution of computed financial health scores",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

# Narrative service metrics
narrative_attempt_failures_counter = Counter(
    "narrative_attempt_failures_total",
    "Failed narrative generation attempts",
    ["classification"],  # retryable | fatal
)

narrative_fallback_counter = Counter(
    "narrative_fallback_total",
    "Responses served with fallback narrative text",
    ["flow"],  # life_event_plan | health_score
)

narrative_latency_histogram = Histogram(
    "narrative_latency_seconds",
    "Narrative service response time",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_plan(outcome: str) -> None:
    """Record plan outcome for monitoring how often goals need a longer timeframe"""
    plan_counter.labels(outcome=outcome).inc()


def record_health_score(score: int) -> None:
    health_score_histogram.observe(score)
