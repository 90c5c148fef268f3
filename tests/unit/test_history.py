"""Unit tests for the transaction history line format"""

from datetime import date
from budget_planner.domain.history import format_transaction_history, parse_transaction_history
from budget_planner.domain.models import Transaction

HISTORY = """2024-07-01: income of 85,000 for 'July salary' in category 'Salary'
2024-07-02: expense of 1250.50 for 'Weekly groceries' in category 'Groceries'
not a transaction line
2024-07-03: expense of 0 for 'Free trial' in category 'Entertainment'
2024-13-40: expense of 100 for 'Bad date' in category 'Shopping'
2024-07-05: expense of 3000 for 'Concert' in category 'Entertainment'"""


def test_parse_transaction_history():
    transactions = parse_transaction_history(HISTORY)

    assert len(transactions) == 3
    assert transactions[0] == Transaction(date(2024, 7, 1), "income", 85_000, "Salary", "July salary")
    assert transactions[1].amount == 1250.5
    assert transactions[1].category == "Groceries"
    assert transactions[2].description == "Concert"


def test_parse_empty_history():
    assert parse_transaction_history("") == []


def test_format_then_parse_preserves_transactions():
    transactions = [
        Transaction(date(2024, 7, 1), "income", 85_000, "Salary", "July salary"),
        Transaction(date(2024, 7, 9), "expense", 1234567.25, "Rent", "Annual rent"),
    ]
    assert parse_transaction_history(format_transaction_history(transactions)) == transactions


def test_format_uses_uncategorized_placeholder():
    line = format_transaction_history([Transaction(date(2024, 7, 1), "expense", 10, None, "Misc")])
    assert line == "2024-07-01: expense of 10 for 'Misc' in category 'Uncategorized'"
