"""
Synthetic Extractor — realistic stand-in transactions.

Used when the parse service is unreachable or finds nothing, and for
demos, so the rest of the pipeline always has data to work on. All
randomness goes through one ``random.Random`` instance; a fixed seed and a
fixed ``today`` reproduce the same statement exactly.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from spendsight.extractors.base import BaseExtractor
from spendsight.models.transaction import Transaction, TransactionType

logger = logging.getLogger("spendsight.extractors.synthetic")


@dataclass(frozen=True)
class SpendProfile:
    """Amount band and description keywords for one spending category."""

    minimum: float
    maximum: float
    keywords: tuple[str, ...]


SPEND_PROFILES: dict[str, SpendProfile] = {
    "Food & Dining": SpendProfile(5, 150, ("restaurant", "food", "dining", "cafe", "coffee", "grocery", "supermarket")),
    "Transportation": SpendProfile(2, 100, ("uber", "lyft", "taxi", "transit", "parking", "fuel", "gas")),
    "Shopping": SpendProfile(10, 500, ("amazon", "walmart", "target", "store", "shop", "retail")),
    "Bills & Utilities": SpendProfile(50, 1000, ("electric", "water", "gas", "internet", "phone", "rent")),
    "Entertainment": SpendProfile(5, 200, ("netflix", "spotify", "movie", "theater", "concert", "sports")),
    "Healthcare": SpendProfile(10, 300, ("pharmacy", "doctor", "medical", "health", "dental", "hospital")),
    "Education": SpendProfile(20, 1000, ("school", "university", "college", "course", "training", "textbook")),
    "Travel": SpendProfile(100, 2000, ("hotel", "airline", "flight", "booking", "airbnb", "resort")),
    "Other": SpendProfile(5, 200, ("transaction", "payment", "purchase")),
}

_PREFIXES = ("Payment to", "Purchase at", "Transaction at", "Charge from")
_LOCATIONS = ("Downtown", "Online", "Store #1234", "Branch #5678")
_DEBIT_LABELS = (
    "Grocery Store",
    "Restaurant",
    "Gas Station",
    "Online Shopping",
    "Utility Bill",
    "Entertainment",
    "Healthcare",
    "Education",
    "Transportation",
)

CREDIT_PROBABILITY = 0.1
MAX_PER_DAY = 5


class SyntheticExtractor(BaseExtractor):
    """Generate a plausible statement covering the last ``days`` days.

    Usage::

        extractor = SyntheticExtractor(days=90, seed=7)
        transactions = extractor.generate()
    """

    name = "synthetic"
    description = "Synthetic transactions for offline and demo use"

    def __init__(
        self,
        *,
        days: int = 30,
        seed: int | None = None,
        today: date | None = None,
        **options: Any,
    ) -> None:
        super().__init__(**options)
        if days not in (30, 90):
            raise ValueError(f"days must be 30 or 90, got {days}")
        self.days = days
        self.seed = seed
        self.today = today

    async def extract(self, content: bytes = b"") -> list[Transaction]:
        """Ignore the content and return a generated statement."""
        return self.generate()

    def generate(self) -> list[Transaction]:
        """Build the synthetic transaction list, newest day first."""
        rng = random.Random(self.seed)
        anchor = self.today or date.today()
        transactions: list[Transaction] = []

        for offset in range(self.days):
            txn_date = anchor - timedelta(days=offset)
            for _ in range(rng.randint(1, MAX_PER_DAY)):
                if rng.random() > 1 - CREDIT_PROBABILITY:
                    amount, description = self._credit(rng)
                    txn_type = TransactionType.CREDIT
                else:
                    amount, description = self._debit(rng)
                    txn_type = TransactionType.DEBIT
                    amount = -amount
                transactions.append(Transaction(
                    date=txn_date,
                    description=description,
                    amount=round(amount, 2),
                    type=txn_type,
                ))

        logger.info("Generated %d synthetic transactions over %d days", len(transactions), self.days)
        return transactions

    @staticmethod
    def _credit(rng: random.Random) -> tuple[float, str]:
        """Salary, refund, or incoming transfer."""
        if rng.random() > 0.7:
            return rng.uniform(3000, 5000), "Salary Deposit"
        if rng.random() > 0.5:
            return rng.uniform(20, 220), f"Refund - {rng.choice(_DEBIT_LABELS)}"
        return rng.uniform(100, 600), "Transfer In"

    @staticmethod
    def _debit(rng: random.Random) -> tuple[float, str]:
        """Spending drawn from a random category's amount band."""
        category = rng.choice(list(SPEND_PROFILES))
        profile = SPEND_PROFILES[category]
        amount = rng.uniform(profile.minimum, profile.maximum)
        description = f"{rng.choice(_PREFIXES)} {rng.choice(profile.keywords)} {rng.choice(_LOCATIONS)}"
        return amount, description
