"""Investment allocation across instruments, reconciled to the target amount"""

import math
from dataclasses import dataclass
from typing import List, Tuple

from budget_planner.domain.annuity import future_value_of_annuity, round_currency
from budget_planner.domain.exceptions import AllocationInvariantError
from budget_planner.domain.models import InvestmentAllocation


@dataclass(frozen=True)
class InstrumentSpec:
    """One row of an allocation bucket"""

    instrument_type: str
    allocation_percent: int
    annual_return: float
    estimated_return_range: str
    description: str = ""


@dataclass(frozen=True)
class AllocationTable:
    """
    Instrument mixes by timeframe.

    short_term applies up to short_term_max_years, medium_term up to
    medium_term_max_years, long_term beyond that.
    """

    short_term: Tuple[InstrumentSpec, ...]
    medium_term: Tuple[InstrumentSpec, ...]
    long_term: Tuple[InstrumentSpec, ...]
    short_term_max_years: float = 3
    medium_term_max_years: float = 7

    def __post_init__(self):
        for name in ("short_term", "medium_term", "long_term"):
            bucket = getattr(self, name)
            if not bucket:
                raise ValueError(f"{name} bucket is empty")
            total = sum(spec.allocation_percent for spec in bucket)
            if total != 100:
                raise ValueError(f"{name} allocations sum to {total}, expected 100")

    def bucket_for(self, years: float) -> Tuple[InstrumentSpec, ...]:
        if years <= self.short_term_max_years:
            return self.short_term
        if years <= self.medium_term_max_years:
            return self.medium_term
        return self.long_term


DEFAULT_ALLOCATION_TABLE = AllocationTable(
    short_term=(
        InstrumentSpec(
            "Recurring Deposit (RD)",
            60,
            0.065,
            "6-7% p.a.",
            "Fixed monthly deposits with guaranteed returns, suited to goals a few years away.",
        ),
        InstrumentSpec(
            "Short Duration Debt Mutual Funds",
            40,
            0.07,
            "6.5-7.5% p.a.",
            "Low-volatility debt funds that stay liquid close to the goal date.",
        ),
    ),
    medium_term=(
        InstrumentSpec(
            "Fixed Deposit (FD)",
            30,
            0.07,
            "6.5-7.5% p.a.",
            "Capital protection for the portion of savings that must not fluctuate.",
        ),
        InstrumentSpec(
            "Corporate Bond Funds",
            20,
            0.075,
            "7-8% p.a.",
            "High-quality bonds adding steady income above deposit rates.",
        ),
        InstrumentSpec(
            "SIP in Hybrid Mutual Funds",
            50,
            0.10,
            "9-11% p.a.",
            "Balanced equity and debt exposure for growth with moderate risk.",
        ),
    ),
    long_term=(
        InstrumentSpec(
            "Public Provident Fund (PPF)",
            25,
            0.071,
            "7.1% p.a.",
            "Tax-efficient government-backed savings for the stable core of the plan.",
        ),
        InstrumentSpec(
            "Sovereign Gold Bonds",
            15,
            0.08,
            "7-9% p.a.",
            "Gold exposure as a hedge against inflation and equity drawdowns.",
        ),
        InstrumentSpec(
            "SIP in Equity Mutual Funds",
            60,
            0.12,
            "11-13% p.a.",
            "Diversified equity funds to compound wealth over a long horizon.",
        ),
    ),
)


class AllocationPlanner:
    """Split monthly savings across a timeframe bucket's instruments"""

    def __init__(self, table: AllocationTable = DEFAULT_ALLOCATION_TABLE):
        self.table = table

    def plan(self, monthly_savings: int, years: float, target_amount: float) -> List[InvestmentAllocation]:
        """
        Build the allocation list for a feasible plan.

        Requirements:
        - Percentages sum to exactly 100 (last instrument takes 100 - previous)
        - Monthly investments sum to monthly_savings (last absorbs rounding)
        - Future values sum to exactly target_amount (last absorbs the residual)

        Example:
            savings 12150, short-term mix 60/40
            RD: round(12150 * 0.6) = 7290, debt funds: 12150 - 7290 = 4860
            future values are then shifted so their total equals the target
        """
        bucket = self.table.bucket_for(years)
        total_months = years * 12

        allocations: List[InvestmentAllocation] = []
        percent_so_far = 0
        invested_so_far = 0

        for i, spec in enumerate(bucket):
            is_last = i == len(bucket) - 1

            if is_last:
                percent = 100 - percent_so_far
                monthly = monthly_savings - invested_so_far
            else:
                percent = spec.allocation_percent
                monthly = round_currency(monthly_savings * percent / 100)

            percent_so_far += percent
            invested_so_far += monthly

            future_value = round_currency(
                future_value_of_annuity(monthly, spec.annual_return / 12, total_months)
            )

            allocations.append(
                InvestmentAllocation(
                    instrument_type=spec.instrument_type,
                    allocation_percent=percent,
                    estimated_return_range=spec.estimated_return_range,
                    assumed_annual_return=spec.annual_return,
                    monthly_investment=monthly,
                    future_value=future_value,
                    description=spec.description,
                )
            )

        # Last instrument absorbs the gap between projected and target value
        residual = target_amount - sum(a.future_value for a in allocations)
        allocations[-1].future_value += residual

        verify_allocations(allocations, target_amount)
        return allocations


def verify_allocations(allocations: List[InvestmentAllocation], target_amount: float) -> None:
    """
    Raises:
        AllocationInvariantError: If percentages do not sum to 100 or
            future values do not sum to target_amount
    """
    percent_total = sum(a.allocation_percent for a in allocations)
    if percent_total != 100:
        raise AllocationInvariantError(f"Allocation percentages sum to {percent_total}, expected 100")

    value_total = sum(a.future_value for a in allocations)
    if not math.isclose(value_total, target_amount, rel_tol=0, abs_tol=1e-6):
        raise AllocationInvariantError(
            f"Future values sum to {value_total}, expected {target_amount}"
        )
