"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from budget_planner.api.middleware import RequestIDMiddleware, MetricsMiddleware
from budget_planner.api.v1 import plans, health_score
from budget_planner.infrastructure.observability.logging import setup_logging
from budget_planner.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Budget Planner",
        description="Life event planning and financial health scoring service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": settings.service_name,
            "blended_annual_return_rate": settings.blended_annual_return_rate,
            "narrative_max_attempts": settings.narrative_max_attempts,
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(plans.router, prefix="/v1", tags=["plans"])
    app.include_router(health_score.router, prefix="/v1", tags=["health-score"])

    return app


app = create_app()
