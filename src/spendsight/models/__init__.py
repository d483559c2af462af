"""Data models — transactions and analysis results."""
from spendsight.models.analysis import (
    AnalysisResult,
    Category,
    HistoryEntry,
    Insight,
    InsightType,
    Period,
)
from spendsight.models.transaction import Transaction, TransactionType

__all__ = [
    "AnalysisResult",
    "Category",
    "HistoryEntry",
    "Insight",
    "InsightType",
    "Period",
    "Transaction",
    "TransactionType",
]
