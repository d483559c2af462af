"""
Transaction model — a single statement line after extraction.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel


class TransactionType(str, Enum):
    """Direction of money movement."""

    DEBIT = "debit"
    CREDIT = "credit"


class Transaction(BaseModel):
    """A single bank statement transaction.

    Amounts are signed once extraction is done: credits positive,
    debits negative. Spending totals always work on ``abs(amount)``.
    """

    date: date
    description: str = ""
    amount: float
    type: TransactionType
    category: str | None = None

    @property
    def is_debit(self) -> bool:
        return self.type == TransactionType.DEBIT

    @property
    def is_credit(self) -> bool:
        return self.type == TransactionType.CREDIT

    @property
    def spend(self) -> float:
        """Absolute spending contributed by this transaction (0 for credits)."""
        return abs(self.amount) if self.is_debit else 0.0
