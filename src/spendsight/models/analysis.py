"""
Analysis result models — categories, insights, and the root result.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from spendsight.models.transaction import Transaction


class InsightType(str, Enum):
    """What kind of observation an insight makes."""

    SPENDING = "spending"
    SAVINGS = "savings"
    TREND = "trend"
    ALERT = "alert"


class Category(BaseModel):
    """Spending summary for one category.

    ``amount`` is the absolute debit total of the member transactions.
    Credits that land in a category are listed but add nothing to it.
    """

    name: str
    amount: float = 0.0
    percentage: float = 0.0
    transactions: list[Transaction] = Field(default_factory=list)


class Insight(BaseModel):
    """A rule-triggered, human-readable observation."""

    title: str
    description: str
    icon: str = ""
    color: str = ""
    type: InsightType


class Period(BaseModel):
    """Statement period as ISO dates; both empty when there are no transactions."""

    start: str = ""
    end: str = ""


class AnalysisResult(BaseModel):
    """Complete statement analysis — the main output of SpendSight."""

    total_spending: float = 0.0
    total_income: float = 0.0
    net_change: float = 0.0
    categories: list[Category] = Field(default_factory=list)
    insights: list[Insight] = Field(default_factory=list)
    period: Period = Field(default_factory=Period)
    transactions: list[Transaction] = Field(default_factory=list)
    source: str = "unknown"

    @property
    def top_category(self) -> Category | None:
        """Category with the highest spending, if any spending exists."""
        spending = [c for c in self.categories if c.amount > 0]
        if not spending:
            return None
        return max(spending, key=lambda c: c.amount)

    def to_markdown(self, currency_symbol: str = "$") -> str:
        """Export result as Markdown."""
        from spendsight.exporters.markdown import render_markdown

        return render_markdown(self, currency_symbol=currency_symbol)

    def to_json(self) -> str:
        """Export result as JSON."""
        return self.model_dump_json(indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Export result as dictionary."""
        return self.model_dump(mode="json")


class HistoryEntry(AnalysisResult):
    """A persisted analysis with its storage envelope."""

    id: str
    timestamp: datetime
