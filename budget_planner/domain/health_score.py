"""Financial health scoring - 50/30/20 budget adherence"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List

from budget_planner.domain.models import HealthScoreResult, Transaction

NEEDS_TARGET_PCT = 50
WANTS_TARGET_PCT = 30
SAVINGS_TARGET_PCT = 20

NO_INCOME_SUMMARY = (
    "No income recorded. Please add income transactions to calculate your financial health score."
)


@dataclass(frozen=True)
class CategoryTaxonomy:
    """Maps expense categories onto the three 50/30/20 buckets"""

    needs: FrozenSet[str]
    wants: FrozenSet[str]
    savings_and_debt: FrozenSet[str]

    def bucket_of(self, category: str | None) -> str | None:
        if category in self.needs:
            return "needs"
        if category in self.wants:
            return "wants"
        if category in self.savings_and_debt:
            return "savings_and_debt"
        return None


DEFAULT_TAXONOMY = CategoryTaxonomy(
    needs=frozenset({"Groceries", "Utilities", "Transport", "Rent", "Health & Wellness", "Education"}),
    wants=frozenset({"Food & Dining", "Shopping", "Entertainment", "Travel", "Other Expense"}),
    savings_and_debt=frozenset({"EMI", "Investment"}),
)


def needs_points(needs_pct: float) -> float:
    """Max 50 points; lose 2 per percentage point above 50%"""
    if needs_pct <= NEEDS_TARGET_PCT:
        return 50.0
    return max(0.0, 50 - (needs_pct - NEEDS_TARGET_PCT) * 2)


def wants_points(wants_pct: float) -> float:
    """Max 30 points; lose 1.5 per percentage point above 30%"""
    if wants_pct <= WANTS_TARGET_PCT:
        return 30.0
    return max(0.0, 30 - (wants_pct - WANTS_TARGET_PCT) * 1.5)


def savings_points(savings_pct: float) -> float:
    """Max 20 points; lose 1 per percentage point below 20%"""
    if savings_pct >= SAVINGS_TARGET_PCT:
        return 20.0
    return max(0.0, 20 - (SAVINGS_TARGET_PCT - savings_pct) * 1)


def summarize_score(score: int) -> str:
    """Baseline one-line summary used when no narrative text is available"""
    if score >= 80:
        return f"Your financial health score is {score}/100. Your budget closely follows the 50/30/20 rule."
    if score >= 50:
        return f"Your financial health score is {score}/100. You are on the right track with room to rebalance your spending."
    return f"Your financial health score is {score}/100. Your spending is well outside the 50/30/20 guideline."


class HealthScoreCalculator:
    """Scores transaction history against the 50/30/20 rule"""

    def __init__(self, taxonomy: CategoryTaxonomy = DEFAULT_TAXONOMY):
        self.taxonomy = taxonomy

    def score(self, transactions: Iterable[Transaction]) -> HealthScoreResult:
        """
        Calculate the 0-100 health score.

        Requirements:
        - Percentages are of total income, not total expenses
        - Expenses in unknown categories count toward total_expenses only
        - Unspent income is folded into Savings & Debt
        - Zero income short-circuits to a score of 0
        """
        transactions = list(transactions)
        total_income = sum(t.amount for t in transactions if t.type == "income")

        if total_income <= 0:
            return self._no_income_result()

        spending = {"needs": 0.0, "wants": 0.0, "savings_and_debt": 0.0}
        total_expenses = 0.0
        for txn in transactions:
            if txn.type != "expense":
                continue
            total_expenses += txn.amount
            bucket = self.taxonomy.bucket_of(txn.category)
            if bucket is not None:
                spending[bucket] += txn.amount

        remaining = total_income - sum(spending.values())
        savings_and_debt = spending["savings_and_debt"] + (remaining if remaining > 0 else 0)

        needs_pct = spending["needs"] / total_income * 100
        wants_pct = spending["wants"] / total_income * 100
        savings_pct = savings_and_debt / total_income * 100

        n_points = needs_points(needs_pct)
        w_points = wants_points(wants_pct)
        s_points = savings_points(savings_pct)
        score = round_score(n_points + w_points + s_points)

        strengths, improvements = self._observations(needs_pct, wants_pct, savings_pct)

        return HealthScoreResult(
            score=score,
            needs_percentage=round(needs_pct, 1),
            wants_percentage=round(wants_pct, 1),
            savings_and_debt_percentage=round(savings_pct, 1),
            total_income=total_income,
            needs_spending=spending["needs"],
            wants_spending=spending["wants"],
            savings_and_debt=savings_and_debt,
            total_expenses=total_expenses,
            needs_points=n_points,
            wants_points=w_points,
            savings_points=s_points,
            needs_target=total_income * NEEDS_TARGET_PCT / 100,
            wants_target=total_income * WANTS_TARGET_PCT / 100,
            savings_target=total_income * SAVINGS_TARGET_PCT / 100,
            summary=summarize_score(score),
            strengths=strengths,
            areas_for_improvement=improvements,
        )

    def _observations(self, needs_pct: float, wants_pct: float, savings_pct: float) -> tuple[List[str], List[str]]:
        strengths: List[str] = []
        improvements: List[str] = []

        if needs_pct <= NEEDS_TARGET_PCT:
            strengths.append("Your essential living costs are within half of your income.")
        else:
            improvements.append(
                f"Essential costs take {needs_pct:.1f}% of your income. Review rent, utilities "
                f"and commuting to bring them closer to {NEEDS_TARGET_PCT}%."
            )

        if wants_pct <= WANTS_TARGET_PCT:
            strengths.append("Your discretionary spending is under control.")
        else:
            improvements.append(
                f"Discretionary spending is {wants_pct:.1f}% of your income. Cutting back on dining "
                f"out and shopping could free up money for your goals."
            )

        if savings_pct >= SAVINGS_TARGET_PCT:
            strengths.append(f"You are putting {savings_pct:.1f}% of your income toward savings and debt repayment.")
        else:
            improvements.append(
                f"Only {savings_pct:.1f}% of your income goes to savings and debt. Consider a recurring "
                f"investment to reach {SAVINGS_TARGET_PCT}%."
            )

        return strengths, improvements

    def _no_income_result(self) -> HealthScoreResult:
        return HealthScoreResult(
            score=0,
            needs_percentage=0.0,
            wants_percentage=0.0,
            savings_and_debt_percentage=0.0,
            total_income=0.0,
            needs_spending=0.0,
            wants_spending=0.0,
            savings_and_debt=0.0,
            total_expenses=0.0,
            needs_points=0.0,
            wants_points=0.0,
            savings_points=0.0,
            needs_target=0.0,
            wants_target=0.0,
            savings_target=0.0,
            summary=NO_INCOME_SUMMARY,
            strengths=[],
            areas_for_improvement=["Add income transactions to get started."],
        )


def round_score(raw: float) -> int:
    """Clamp to [0, 100] and round half-up"""
    clamped = max(0.0, min(100.0, raw))
    return int(clamped + 0.5)
