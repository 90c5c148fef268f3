"""Deterministic seeds that keep narrative text stable for identical inputs"""

import hashlib
import json
from typing import Any, Mapping

SEED_LENGTH = 16
_SEPARATOR = "\x1f"


def _digest(payload: str) -> str:
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:SEED_LENGTH]


def compute_seed(goal: str, target_amount: float, years: float, monthly_income: float) -> str:
    """
    Derive a stable identifier from plan inputs.

    Numbers are normalized through float() so 500000 and 500000.0 share a seed.
    Used as a consistency key for narrative generation, not for security.
    """
    parts = [goal, repr(float(target_amount)), repr(float(years)), repr(float(monthly_income))]
    return _digest(_SEPARATOR.join(parts))


def compute_context_seed(context: Mapping[str, Any]) -> str:
    """Seed for arbitrary narrative context (key order does not matter)"""
    return _digest(json.dumps(context, sort_keys=True, default=str))
