"""
SpendSight analyzers — pure computation over extracted transactions.

Categorization, aggregation and insight rules are total functions: they
never raise on well-typed input and hold no state between calls.
"""

from spendsight.analyzers.aggregator import aggregate_categories, total_income, total_spending
from spendsight.analyzers.categorizer import (
    CATEGORY_KEYWORDS,
    OTHER_CATEGORY,
    categorize,
    categorize_transactions,
)
from spendsight.analyzers.insights import InsightEngine, InsightThresholds, generate_insights

__all__ = [
    "CATEGORY_KEYWORDS",
    "OTHER_CATEGORY",
    "InsightEngine",
    "InsightThresholds",
    "aggregate_categories",
    "categorize",
    "categorize_transactions",
    "generate_insights",
    "total_income",
    "total_spending",
]
