"""
Statement line parsing — recognise transactions in extracted statement text.

This mirrors the line adapter behind the PDF parse service so that plain
text statements (or text already pulled out of a PDF) can be handled
locally. Only a small, fixed set of line shapes is recognised:

    01 Nov 2024 Opening balance £1,000.00
    03 Nov 2024 Interest earned  Interest  +£1.25
    05 Nov 2024 To Jane's Account  Transfer  -£150.00
    30 Nov 2024 Closing balance £851.25

Anything else contributes no transaction.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from spendsight.exceptions import ExtractionError
from spendsight.extractors.base import BaseExtractor
from spendsight.extractors.normalize import parse_amount, parse_date, signed_amount
from spendsight.models.transaction import Transaction, TransactionType

logger = logging.getLogger("spendsight.extractors.statement_lines")

_DATE = r"(?P<date>\d{1,2}\s+[A-Za-z]{3,9}\s+\d{4})"
_AMOUNT = r"(?P<amount>[+-]?[£$€]\s?[\d,]+(?:\.\d+)?)"
_SIGNED_AMOUNT = r"(?P<amount>[+-][£$€]\s?[\d,]+(?:\.\d+)?)"

_HEADER_WORDS = ("date", "transaction details")


@dataclass(frozen=True)
class LinePattern:
    """One recognised statement line shape."""

    name: str
    regex: re.Pattern[str]
    type: TransactionType
    description: str


LINE_PATTERNS: tuple[LinePattern, ...] = (
    LinePattern(
        name="opening_balance",
        regex=re.compile(_DATE + r"\s*Opening balance\s*" + _AMOUNT, re.IGNORECASE),
        type=TransactionType.CREDIT,
        description="Opening Balance",
    ),
    LinePattern(
        name="interest",
        regex=re.compile(_DATE + r"\s*Interest earned\b.*?" + _SIGNED_AMOUNT, re.IGNORECASE),
        type=TransactionType.CREDIT,
        description="Interest Earned",
    ),
    LinePattern(
        name="transfer_out",
        regex=re.compile(_DATE + r"\s*To (?P<payee>.+?)'s Account\b.*?" + _SIGNED_AMOUNT, re.IGNORECASE),
        type=TransactionType.DEBIT,
        description="Transfer Out",
    ),
    LinePattern(
        name="closing_balance",
        regex=re.compile(_DATE + r"\s*Closing balance\s*" + _AMOUNT, re.IGNORECASE),
        type=TransactionType.CREDIT,
        description="Closing Balance",
    ),
)


def is_skippable(line: str) -> bool:
    """Empty lines and column headers never carry a transaction."""
    lowered = line.strip().lower()
    return not lowered or any(word in lowered for word in _HEADER_WORDS)


class StatementLineParser:
    """Match statement text lines against :data:`LINE_PATTERNS`."""

    def __init__(self, patterns: tuple[LinePattern, ...] = LINE_PATTERNS) -> None:
        self.patterns = patterns

    def parse_line(self, line: str) -> Transaction | None:
        """Return the transaction on this line, or None if there is none."""
        if is_skippable(line):
            return None

        for pattern in self.patterns:
            match = pattern.regex.search(line)
            if not match:
                continue
            try:
                txn_date = parse_date(match.group("date"))
                amount = parse_amount(match.group("amount"))
            except ExtractionError as e:
                logger.debug("Skipping line %r: %s", line, e)
                return None
            return Transaction(
                date=txn_date,
                description=pattern.description,
                amount=signed_amount(amount, pattern.type),
                type=pattern.type,
            )
        return None

    def parse_lines(self, lines: Iterable[str]) -> list[Transaction]:
        """Parse every line, keeping statement order."""
        transactions: list[Transaction] = []
        for line in lines:
            txn = self.parse_line(line)
            if txn is not None:
                transactions.append(txn)
        return transactions

    def parse_text(self, text: str) -> list[Transaction]:
        return self.parse_lines(text.splitlines())


class TextExtractor(BaseExtractor):
    """Extract transactions from a plain-text statement."""

    name = "text"
    description = "Parse plain-text statement lines"

    def __init__(self, encoding: str = "utf-8", **options: Any) -> None:
        super().__init__(**options)
        self.encoding = encoding
        self.parser = StatementLineParser()

    async def extract(self, content: bytes) -> list[Transaction]:
        try:
            text = content.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise ExtractionError(f"Statement text is not valid {self.encoding}") from e

        transactions = self.parser.parse_text(text)
        logger.info("Parsed %d transactions from statement text", len(transactions))
        return transactions
