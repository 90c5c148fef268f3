"""Line-oriented transaction history format used by the dashboard"""

import re
from datetime import date
from typing import Iterable, List

from budget_planner.domain.models import Transaction

UNCATEGORIZED = "Uncategorized"

# 2024-07-01: expense of 1,250.50 for 'Weekly groceries' in category 'Groceries'
_LINE_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}): (income|expense) of ([\d,.]+) for '([^']*)' in category '([^']*)'$"
)


def parse_transaction_history(text: str) -> List[Transaction]:
    """
    Parse one transaction per line.

    Lines that do not match the format, or carry an invalid date or a
    non-positive amount, are skipped.
    """
    transactions = []
    for line in text.splitlines():
        match = _LINE_RE.match(line.strip())
        if not match:
            continue
        raw_date, txn_type, raw_amount, description, category = match.groups()
        try:
            txn_date = date.fromisoformat(raw_date)
            amount = float(raw_amount.replace(",", ""))
        except ValueError:
            continue
        if amount <= 0:
            continue
        transactions.append(
            Transaction(
                date=txn_date,
                type=txn_type,
                amount=amount,
                category=category,
                description=description,
            )
        )
    return transactions


def _format_amount(amount: float) -> str:
    return f"{amount:.2f}".rstrip("0").rstrip(".")


def format_transaction_history(transactions: Iterable[Transaction]) -> str:
    """Serialize transactions into the line format"""
    return "\n".join(
        f"{t.date.isoformat()}: {t.type} of {_format_amount(t.amount)} for '{t.description}' "
        f"in category '{t.category or UNCATEGORIZED}'"
        for t in transactions
    )
