"""
Category aggregation — per-category spending totals and shares.
"""

from __future__ import annotations

from collections.abc import Iterable

from spendsight.analyzers.categorizer import OTHER_CATEGORY
from spendsight.models.analysis import Category
from spendsight.models.transaction import Transaction


def total_spending(transactions: Iterable[Transaction]) -> float:
    """Absolute sum of all debit amounts."""
    return sum(t.spend for t in transactions)


def total_income(transactions: Iterable[Transaction]) -> float:
    """Absolute sum of all credit amounts."""
    return sum(abs(t.amount) for t in transactions if t.is_credit)


def aggregate_categories(transactions: list[Transaction]) -> list[Category]:
    """Group transactions by category in order of first appearance.

    ``percentage`` is relative to spending across the whole list, and is
    0 for every category when there is no spending at all.
    """
    groups: dict[str, list[Transaction]] = {}
    for txn in transactions:
        groups.setdefault(txn.category or OTHER_CATEGORY, []).append(txn)

    spending = total_spending(transactions)
    categories: list[Category] = []
    for name, members in groups.items():
        amount = total_spending(members)
        categories.append(Category(
            name=name,
            amount=amount,
            percentage=(amount / spending * 100) if spending else 0.0,
            transactions=members,
        ))
    return categories
