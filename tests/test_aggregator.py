"""Tests for category aggregation."""

from datetime import date

import pytest

from spendsight.analyzers.aggregator import aggregate_categories, total_income, total_spending
from spendsight.analyzers.categorizer import categorize_transactions
from spendsight.extractors.synthetic import SyntheticExtractor
from spendsight.models.transaction import Transaction, TransactionType


def _debit(description: str, amount: float) -> Transaction:
    return Transaction(
        date=date(2024, 11, 1),
        description=description,
        amount=-abs(amount),
        type=TransactionType.DEBIT,
    )


def _credit(description: str, amount: float) -> Transaction:
    return Transaction(
        date=date(2024, 11, 1),
        description=description,
        amount=abs(amount),
        type=TransactionType.CREDIT,
    )


class TestTotals:
    def test_total_spending_is_absolute_debit_sum(self) -> None:
        txns = [_debit("a", 10), _debit("b", 30), _credit("c", 500)]
        assert total_spending(txns) == pytest.approx(40.0)

    def test_total_spending_ignores_debit_sign(self) -> None:
        positive_debit = Transaction(
            date=date(2024, 11, 1), description="x", amount=25.0, type=TransactionType.DEBIT
        )
        assert total_spending([positive_debit, _debit("y", 25)]) == pytest.approx(50.0)

    def test_total_income(self) -> None:
        txns = [_credit("Salary", 3000), _credit("Refund", 20), _debit("coffee", 5)]
        assert total_income(txns) == pytest.approx(3020.0)

    def test_empty(self) -> None:
        assert total_spending([]) == 0
        assert total_income([]) == 0


class TestAggregateCategories:
    def test_first_appearance_order(self) -> None:
        txns = categorize_transactions([
            _debit("Uber", 10),
            _debit("coffee", 5),
            _debit("Lyft", 15),
            _debit("Mystery", 20),
        ])
        categories = aggregate_categories(txns)

        assert [c.name for c in categories] == ["Transportation", "Food & Dining", "Other"]
        assert [len(c.transactions) for c in categories] == [2, 1, 1]

    def test_amounts_and_percentages(self) -> None:
        txns = categorize_transactions([
            _debit("coffee", 25),
            _debit("Uber", 75),
        ])
        categories = {c.name: c for c in aggregate_categories(txns)}

        assert categories["Food & Dining"].amount == pytest.approx(25.0)
        assert categories["Food & Dining"].percentage == pytest.approx(25.0)
        assert categories["Transportation"].percentage == pytest.approx(75.0)

    def test_credits_listed_but_not_counted(self) -> None:
        txns = categorize_transactions([
            _debit("grocery", 100),
            _credit("Refund - Grocery Store", 40),
            _debit("Uber", 100),
        ])
        categories = {c.name: c for c in aggregate_categories(txns)}

        food = categories["Food & Dining"]
        assert len(food.transactions) == 2
        assert food.amount == pytest.approx(100.0)
        assert food.percentage == pytest.approx(50.0)

    def test_zero_spending_gives_zero_percentages(self) -> None:
        txns = categorize_transactions([_credit("Salary Deposit", 3000)])
        categories = aggregate_categories(txns)

        assert len(categories) == 1
        assert categories[0].amount == 0
        assert categories[0].percentage == 0

    def test_uncategorized_grouped_as_other(self) -> None:
        txn = _debit("coffee", 10)
        categories = aggregate_categories([txn])
        assert categories[0].name == "Other"

    def test_empty(self) -> None:
        assert aggregate_categories([]) == []

    def test_all_debits_percentages_sum_to_100(self) -> None:
        generated = SyntheticExtractor(days=90, seed=11, today=date(2024, 6, 30)).generate()
        debits = categorize_transactions([t for t in generated if t.is_debit])
        categories = aggregate_categories(debits)

        assert sum(c.percentage for c in categories) == pytest.approx(100.0)
        assert all(0 <= c.percentage <= 100 for c in categories)
        assert sum(c.amount for c in categories) == pytest.approx(total_spending(debits))
