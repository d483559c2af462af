"""
Insight Engine — threshold rules over an analysed statement.

Each rule looks at the categories, the raw transactions, or the income and
spending totals and emits at most one insight. Rules run in a fixed order
and every triggered insight is kept, so several may fire on the same data:

1. **High food spending**: Food & Dining above 25% of spending.
2. **Low savings rate**: less than 20% of income left over.
3. **High entertainment spending**: Entertainment above 15% of spending.
4. **Large purchases**: any debit over $500.
5. **Frequent small purchases**: more than 15 debits under $5.
6. **Spending swing**: last 14 days vs the 14 before, moved more than 20%.
7. **Excellent savings rate**: at least 30% of income left over.

The savings rules need income; with zero income both are skipped. The
swing rule is skipped when the earlier window has no spending.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING

from spendsight.models.analysis import Insight, InsightType

if TYPE_CHECKING:
    from spendsight.models.analysis import Category
    from spendsight.models.transaction import Transaction

logger = logging.getLogger("spendsight.analyzers.insights")

FOOD_CATEGORY = "Food & Dining"
ENTERTAINMENT_CATEGORY = "Entertainment"


@dataclass(frozen=True)
class InsightThresholds:
    """Trigger levels for the insight rules."""

    high_food_pct: float = 25.0
    low_savings_rate: float = 0.20
    high_entertainment_pct: float = 15.0
    large_purchase: float = 500.0
    frequent_small_count: int = 15
    small_purchase: float = 5.0
    unusual_change_pct: float = 20.0
    excellent_savings_rate: float = 0.30
    trend_window_days: int = 14


DEFAULT_THRESHOLDS = InsightThresholds()


def _round(value: float) -> int:
    """Round half up to a whole number."""
    return math.floor(value + 0.5)


class InsightEngine:
    """Apply the insight rules to an analysed statement.

    Example usage:
        engine = InsightEngine()
        insights = engine.generate(transactions, categories, spending, income)
    """

    def __init__(self, thresholds: InsightThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def generate(
        self,
        transactions: list[Transaction],
        categories: list[Category],
        total_spending: float,
        total_income: float,
        as_of: date | None = None,
    ) -> list[Insight]:
        """Run every rule in order and collect what fires.

        Args:
            transactions: Categorized transactions.
            categories: Aggregated categories for the same transactions.
            total_spending: Absolute debit total.
            total_income: Credit total.
            as_of: End of the recent spending window. Defaults to the
                latest transaction date.

        Returns:
            Triggered insights, in rule order.
        """
        savings_rate = self.savings_rate(total_income, total_spending)
        candidates = [
            self._high_food_spending(categories),
            self._low_savings_rate(savings_rate),
            self._high_entertainment_spending(categories),
            self._large_purchases(transactions),
            self._frequent_small_purchases(transactions),
            self._spending_trend(transactions, as_of),
            self._excellent_savings_rate(savings_rate),
        ]
        insights = [i for i in candidates if i is not None]
        logger.debug("Generated %d insights", len(insights))
        return insights

    @staticmethod
    def savings_rate(total_income: float, total_spending: float) -> float | None:
        """Share of income not spent, or None when there is no income."""
        if total_income <= 0:
            return None
        return (total_income - total_spending) / total_income

    # ------------------------------------------------------------------ #
    #  Rules                                                              #
    # ------------------------------------------------------------------ #

    def _high_food_spending(self, categories: list[Category]) -> Insight | None:
        food = _find_category(categories, FOOD_CATEGORY)
        if food is None or food.percentage <= self.thresholds.high_food_pct:
            return None
        return Insight(
            title="High Food Spending",
            description=(
                f"Your food spending is {_round(food.percentage)}% of your total spending. "
                "Consider meal planning or reducing takeout orders."
            ),
            icon="restaurant-menu",
            color="#FF6B6B",
            type=InsightType.ALERT,
        )

    def _low_savings_rate(self, savings_rate: float | None) -> Insight | None:
        if savings_rate is None or savings_rate >= self.thresholds.low_savings_rate:
            return None
        return Insight(
            title="Low Savings Rate",
            description=(
                f"Your current savings rate is {_round(savings_rate * 100)}%. "
                f"Try to save at least {_round(self.thresholds.low_savings_rate * 100)}% of your income."
            ),
            icon="account-balance",
            color="#4CAF50",
            type=InsightType.SAVINGS,
        )

    def _high_entertainment_spending(self, categories: list[Category]) -> Insight | None:
        entertainment = _find_category(categories, ENTERTAINMENT_CATEGORY)
        if entertainment is None or entertainment.percentage <= self.thresholds.high_entertainment_pct:
            return None
        return Insight(
            title="High Entertainment Spending",
            description=(
                f"Your entertainment spending is {_round(entertainment.percentage)}% of your total spending. "
                "Look for free or low-cost alternatives."
            ),
            icon="movie",
            color="#FF9800",
            type=InsightType.ALERT,
        )

    def _large_purchases(self, transactions: list[Transaction]) -> Insight | None:
        limit = self.thresholds.large_purchase
        large = [t for t in transactions if t.is_debit and abs(t.amount) > limit]
        if not large:
            return None
        total = sum(abs(t.amount) for t in large)
        return Insight(
            title="Large Purchases Detected",
            description=f"You made {len(large)} purchases over ${limit:,.0f}, totaling ${_round(total)}.",
            icon="warning",
            color="#FFC107",
            type=InsightType.ALERT,
        )

    def _frequent_small_purchases(self, transactions: list[Transaction]) -> Insight | None:
        limit = self.thresholds.small_purchase
        small = [t for t in transactions if t.is_debit and abs(t.amount) < limit]
        if len(small) <= self.thresholds.frequent_small_count:
            return None
        total = sum(abs(t.amount) for t in small)
        return Insight(
            title="Frequent Small Purchases",
            description=(
                f"You made {len(small)} purchases under ${limit:,.0f}, totaling ${_round(total)}. "
                "These can add up quickly!"
            ),
            icon="shopping-cart",
            color="#9C27B0",
            type=InsightType.SPENDING,
        )

    def _spending_trend(self, transactions: list[Transaction], as_of: date | None) -> Insight | None:
        debits = [t for t in transactions if t.is_debit]
        if not debits:
            return None

        anchor = as_of or max(t.date for t in transactions)
        window = timedelta(days=self.thresholds.trend_window_days)
        recent_start = anchor - window
        previous_start = recent_start - window

        recent = sum(abs(t.amount) for t in debits if recent_start < t.date <= anchor)
        previous = sum(abs(t.amount) for t in debits if previous_start < t.date <= recent_start)
        if previous == 0:
            return None

        change = (recent - previous) / previous * 100
        if abs(change) <= self.thresholds.unusual_change_pct:
            return None

        increased = change > 0
        direction = "increased" if increased else "decreased"
        return Insight(
            title="Spending Increased" if increased else "Spending Decreased",
            description=(
                f"Your spending has {direction} by {abs(_round(change))}% compared to the previous period."
            ),
            icon="trending-up" if increased else "trending-down",
            color="#F44336" if increased else "#4CAF50",
            type=InsightType.TREND,
        )

    def _excellent_savings_rate(self, savings_rate: float | None) -> Insight | None:
        if savings_rate is None or savings_rate < self.thresholds.excellent_savings_rate:
            return None
        return Insight(
            title="Excellent Savings Rate",
            description=f"You're saving {_round(savings_rate * 100)}% of your income! Keep up the great work!",
            icon="star",
            color="#FFD700",
            type=InsightType.SAVINGS,
        )


def _find_category(categories: list[Category], name: str) -> Category | None:
    return next((c for c in categories if c.name == name), None)


# Convenience function
def generate_insights(
    transactions: list[Transaction],
    categories: list[Category],
    total_spending: float,
    total_income: float,
    as_of: date | None = None,
) -> list[Insight]:
    """Quick insight generation with the default thresholds."""
    return InsightEngine().generate(transactions, categories, total_spending, total_income, as_of)
