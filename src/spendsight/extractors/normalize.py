"""
Normalization helpers — turn loosely-typed records into Transactions.

Used by every extractor so dates, amounts and signs are handled the same
way regardless of where the data came from.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from spendsight.exceptions import ExtractionError
from spendsight.models.transaction import Transaction, TransactionType

logger = logging.getLogger("spendsight.extractors.normalize")

_CURRENCY_CHARS = re.compile(r"[£$€¥₹,\s]")
_STATEMENT_DATE_FORMATS = ("%d %b %Y", "%d %B %Y")


def parse_date(value: Any) -> date:
    """Parse ISO-8601 (date or datetime) or ``DD Mon YYYY`` into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ExtractionError(f"Unparseable date: {value!r}")

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    collapsed = " ".join(text.split())
    for fmt in _STATEMENT_DATE_FORMATS:
        try:
            return datetime.strptime(collapsed, fmt).date()
        except ValueError:
            continue

    raise ExtractionError(f"Unparseable date: {value!r}")


def parse_amount(value: Any) -> float:
    """Parse a number or a currency string such as ``-£1,234.50``."""
    if isinstance(value, bool):
        raise ExtractionError(f"Unparseable amount: {value!r}")
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(_CURRENCY_CHARS.sub("", value))
        except ValueError as e:
            raise ExtractionError(f"Unparseable amount: {value!r}") from e
    else:
        raise ExtractionError(f"Unparseable amount: {value!r}")

    if not math.isfinite(result):
        raise ExtractionError(f"Non-finite amount: {value!r}")
    return result


def signed_amount(amount: float, txn_type: TransactionType) -> float:
    """Apply the sign convention: credits positive, debits negative."""
    return -abs(amount) if txn_type == TransactionType.DEBIT else abs(amount)


def normalize_record(record: Mapping[str, Any]) -> Transaction:
    """Validate a ``{date, description, amount, type}`` mapping."""
    raw_type = str(record.get("type", "")).strip().lower()
    try:
        txn_type = TransactionType(raw_type)
    except ValueError as e:
        raise ExtractionError(f"Unknown transaction type: {record.get('type')!r}") from e

    return Transaction(
        date=parse_date(record.get("date")),
        description=str(record.get("description") or "").strip(),
        amount=signed_amount(parse_amount(record.get("amount")), txn_type),
        type=txn_type,
    )


def normalize_records(records: Iterable[Mapping[str, Any]]) -> list[Transaction]:
    """Normalize a batch, skipping records that fail validation."""
    transactions: list[Transaction] = []
    for record in records:
        if not isinstance(record, Mapping):
            logger.debug("Skipping non-mapping record: %r", record)
            continue
        try:
            transactions.append(normalize_record(record))
        except ExtractionError as e:
            logger.debug("Skipping record: %s", e)
    return transactions
