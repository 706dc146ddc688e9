# expense_tracker/services/aggregator.py
from decimal import Decimal
from typing import Iterable

from expense_tracker.schemas.transaction import Totals


def summarize(transactions: Iterable) -> Totals:
    """Income, expense and balance totals; other types count toward neither."""
    income = Decimal("0")
    expenses = Decimal("0")
    for txn in transactions:
        amount = txn.amount if txn.amount is not None else Decimal("0")
        if txn.type == "income":
            income += amount
        elif txn.type == "expense":
            expenses += amount
    return Totals(totalIncome=income, totalExpenses=expenses, totalBalance=income - expenses)
