"""Unit tests for deterministic narrative seeds"""

from budget_planner.domain.seed import SEED_LENGTH, compute_context_seed, compute_seed


def test_compute_seed_is_deterministic():
    first = compute_seed("Car", 500_000, 3, 80_000)
    second = compute_seed("Car", 500_000, 3, 80_000)

    assert first == second
    assert len(first) == SEED_LENGTH
    int(first, 16)  # hex digest


def test_compute_seed_normalizes_int_and_float():
    assert compute_seed("Car", 500_000, 3, 80_000) == compute_seed("Car", 500_000.0, 3.0, 80_000.0)


def test_compute_seed_changes_with_every_field():
    base = compute_seed("Car", 500_000, 3, 80_000)
    variants = [
        compute_seed("Bike", 500_000, 3, 80_000),
        compute_seed("Car", 500_001, 3, 80_000),
        compute_seed("Car", 500_000, 3.5, 80_000),
        compute_seed("Car", 500_000, 3, 80_001),
    ]
    assert all(v != base for v in variants)


def test_compute_context_seed_ignores_key_order():
    assert compute_context_seed({"score": 80, "kind": "health_score"}) == compute_context_seed(
        {"kind": "health_score", "score": 80}
    )
    assert compute_context_seed({"score": 80}) != compute_context_seed({"score": 81})
