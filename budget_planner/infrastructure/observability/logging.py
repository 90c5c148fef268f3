"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping every record with UTC time, level and service name"""

    def __init__(self, *args: Any, service_name: str = "budget-planner", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "budget-planner") -> None:
    """Route all records through a single stdout JSON handler"""
    logger = logging.getLogger()
    logger.setLevel(level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s", service_name=service_name)
    )
    logger.addHandler(handler)


def log_plan_outcome(
    request_id: str,
    seed: str,
    is_feasible: bool,
    narrative_fallback: bool,
    duration_ms: float,
) -> None:
    """Log structured plan outcome for analysis"""
    logging.info(
        "Plan completed",
        extra={
            "request_id": request_id,
            "seed": seed,
            "step": "plan_complete",
            "feasibility": "feasible" if is_feasible else "infeasible",
            "narrative_fallback": narrative_fallback,
            "duration_ms": duration_ms,
        },
    )


def log_health_score(request_id: str, score: int, transaction_count: int, duration_ms: float) -> None:
    logging.info(
        "Health score completed",
        extra={
            "request_id": request_id,
            "step": "health_score_complete",
            "score": score,
            "transaction_count": transaction_count,
            "duration_ms": duration_ms,
        },
    )
