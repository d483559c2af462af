"""
Base extractor — abstract interface for all transaction sources.

Extractors are the bridge between raw statement content (PDF bytes, text,
CSV exports) and SpendSight's flat, order-preserving list of transactions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from spendsight.models.transaction import Transaction


class BaseExtractor(ABC):
    """Abstract base class for all extractors.

    To create a new extractor, subclass this and implement:
    - `name`: Unique extractor identifier (also used as the result source).
    - `extract()`: Async method that returns a list of transactions.

    Example::

        class OFXExtractor(BaseExtractor):
            name = "ofx"

            async def extract(self, content: bytes) -> list[Transaction]:
                ...
    """

    name: str = "base"
    description: str = "Base extractor"

    def __init__(self, **options: Any) -> None:
        self.options = options

    @abstractmethod
    async def extract(self, content: bytes) -> list[Transaction]:
        """Extract transactions from statement content.

        Args:
            content: Raw statement bytes.

        Returns:
            Transactions in statement order.

        Raises:
            ExtractionError: If the content cannot be processed at all.
        """
        ...
