"""
CSV Extractor — import transactions from a bank's CSV export.

Supports any CSV with date, amount and description columns. A type
column is optional; without one the amount's sign decides.
"""

from __future__ import annotations

import io
import logging
from typing import Any

import pandas as pd

from spendsight.exceptions import ExtractionError
from spendsight.extractors.base import BaseExtractor
from spendsight.extractors.normalize import parse_amount, parse_date, signed_amount
from spendsight.models.transaction import Transaction, TransactionType

logger = logging.getLogger("spendsight.extractors.csv")

# Common column name mappings
_COLUMN_ALIASES: dict[str, list[str]] = {
    "date": ["date", "transaction_date", "txn_date", "posted_date", "posting_date", "trans_date"],
    "amount": ["amount", "total", "value", "sum", "net_amount"],
    "description": ["description", "memo", "narrative", "details", "transaction details", "reference", "payee"],
    "type": ["type", "transaction_type", "direction", "dr/cr"],
}

_TYPE_ALIASES: dict[str, TransactionType] = {
    "debit": TransactionType.DEBIT,
    "dr": TransactionType.DEBIT,
    "withdrawal": TransactionType.DEBIT,
    "credit": TransactionType.CREDIT,
    "cr": TransactionType.CREDIT,
    "deposit": TransactionType.CREDIT,
}


class CSVExtractor(BaseExtractor):
    """Extract transactions from CSV statement exports.

    Usage::

        extractor = CSVExtractor(delimiter=";")
        transactions = await extractor.extract(Path("export.csv").read_bytes())
    """

    name = "csv"
    description = "Import transactions from CSV exports"

    def __init__(self, encoding: str = "utf-8", delimiter: str = ",", **options: Any) -> None:
        super().__init__(**options)
        self.encoding = encoding
        self.delimiter = delimiter

    async def extract(self, content: bytes) -> list[Transaction]:
        """Read and parse the CSV content."""
        try:
            df = pd.read_csv(io.BytesIO(content), encoding=self.encoding, delimiter=self.delimiter)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise ExtractionError(f"Unreadable CSV statement: {e}") from e

        df.columns = df.columns.str.strip().str.lower()
        col_map = self._detect_columns(df)
        if "date" not in col_map or "amount" not in col_map:
            raise ExtractionError("CSV statement needs date and amount columns")

        transactions = self._parse_transactions(df, col_map)
        logger.info("Parsed %d transactions from %d CSV rows", len(transactions), len(df))
        return transactions

    def _detect_columns(self, df: pd.DataFrame) -> dict[str, str]:
        """Auto-detect column mappings from the DataFrame."""
        col_map: dict[str, str] = {}
        df_cols = set(df.columns)

        for field, aliases in _COLUMN_ALIASES.items():
            for alias in aliases:
                if alias in df_cols:
                    col_map[field] = alias
                    break

        return col_map

    def _parse_transactions(self, df: pd.DataFrame, col_map: dict[str, str]) -> list[Transaction]:
        """Convert DataFrame rows to Transaction objects."""
        transactions: list[Transaction] = []

        desc_col = col_map.get("description")
        type_col = col_map.get("type")

        for _, row in df.iterrows():
            try:
                txn_date = parse_date(str(row[col_map["date"]]))
                raw_amount = row[col_map["amount"]]
                amount = parse_amount(raw_amount if isinstance(raw_amount, str) else float(raw_amount))

                txn_type = self._detect_type(row.get(type_col) if type_col else None, amount)
                description = row.get(desc_col) if desc_col else ""
                transactions.append(Transaction(
                    date=txn_date,
                    description="" if pd.isna(description) else str(description).strip(),
                    amount=signed_amount(amount, txn_type),
                    type=txn_type,
                ))
            except (ExtractionError, ValueError, TypeError) as e:
                logger.debug("Skipping row: %s", e)

        return transactions

    @staticmethod
    def _detect_type(raw_type: Any, amount: float) -> TransactionType:
        """Use the type column when it is recognisable, else the sign."""
        if isinstance(raw_type, str):
            mapped = _TYPE_ALIASES.get(raw_type.strip().lower())
            if mapped is not None:
                return mapped
        return TransactionType.DEBIT if amount < 0 else TransactionType.CREDIT
