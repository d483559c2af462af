"""Tests for record normalization."""

from datetime import date, datetime

import pytest

from spendsight.exceptions import ExtractionError
from spendsight.extractors.normalize import (
    normalize_record,
    normalize_records,
    parse_amount,
    parse_date,
    signed_amount,
)
from spendsight.models.transaction import TransactionType


class TestParseDate:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-11-05", date(2024, 11, 5)),
            ("2024-11-05T10:30:00", date(2024, 11, 5)),
            ("2024-11-05T10:30:00Z", date(2024, 11, 5)),
            ("05 Nov 2024", date(2024, 11, 5)),
            ("5 November 2024", date(2024, 11, 5)),
            ("05  Nov   2024", date(2024, 11, 5)),
        ],
    )
    def test_formats(self, value: str, expected: date) -> None:
        assert parse_date(value) == expected

    def test_date_objects_pass_through(self) -> None:
        assert parse_date(date(2024, 1, 2)) == date(2024, 1, 2)
        assert parse_date(datetime(2024, 1, 2, 15, 0)) == date(2024, 1, 2)

    @pytest.mark.parametrize("value", ["", "   ", "not a date", "32 Nov 2024", None, 20241105])
    def test_rejects_garbage(self, value: object) -> None:
        with pytest.raises(ExtractionError):
            parse_date(value)


class TestParseAmount:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (12, 12.0),
            (-3.5, -3.5),
            ("1,234.50", 1234.5),
            ("-£150.00", -150.0),
            ("+£3.41", 3.41),
            ("$ 2,000", 2000.0),
            ("€99.99", 99.99),
        ],
    )
    def test_values(self, value: object, expected: float) -> None:
        assert parse_amount(value) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "value",
        ["", "abc", "£", None, True, [1], "nan", "NaN", "inf", "-Infinity", float("inf"), float("nan")],
    )
    def test_rejects_garbage(self, value: object) -> None:
        with pytest.raises(ExtractionError):
            parse_amount(value)


class TestSignedAmount:
    def test_debits_negative(self) -> None:
        assert signed_amount(50, TransactionType.DEBIT) == -50
        assert signed_amount(-50, TransactionType.DEBIT) == -50

    def test_credits_positive(self) -> None:
        assert signed_amount(50, TransactionType.CREDIT) == 50
        assert signed_amount(-50, TransactionType.CREDIT) == 50


class TestNormalizeRecord:
    def test_service_record(self) -> None:
        txn = normalize_record({
            "date": "2024-11-03T00:00:00.000Z",
            "description": " Transfer Out ",
            "amount": 150,
            "type": "debit",
        })
        assert txn.date == date(2024, 11, 3)
        assert txn.description == "Transfer Out"
        assert txn.amount == -150
        assert txn.type == TransactionType.DEBIT
        assert txn.category is None

    def test_type_is_case_insensitive(self) -> None:
        txn = normalize_record({"date": "2024-11-03", "amount": "-20", "type": "CREDIT"})
        assert txn.type == TransactionType.CREDIT
        assert txn.amount == 20
        assert txn.description == ""

    def test_unknown_type(self) -> None:
        with pytest.raises(ExtractionError, match="Unknown transaction type"):
            normalize_record({"date": "2024-11-03", "amount": 1, "type": "transfer"})

    def test_missing_date(self) -> None:
        with pytest.raises(ExtractionError):
            normalize_record({"amount": 1, "type": "debit"})


class TestNormalizeRecords:
    def test_skips_invalid_records(self) -> None:
        records = [
            {"date": "2024-11-01", "description": "ok", "amount": 10, "type": "credit"},
            {"date": "nope", "description": "bad date", "amount": 10, "type": "credit"},
            "not a mapping",
            {"date": "2024-11-02", "description": "bad amount", "amount": "x", "type": "debit"},
            {"date": "2024-11-02", "description": "not a number", "amount": "NaN", "type": "debit"},
            {"date": "2024-11-03", "description": "ok too", "amount": 5, "type": "debit"},
        ]
        transactions = normalize_records(records)  # type: ignore[arg-type]

        assert [t.description for t in transactions] == ["ok", "ok too"]

    def test_empty(self) -> None:
        assert normalize_records([]) == []
