"""Tests for the CSV statement extractor."""

from datetime import date
from pathlib import Path

import pytest

from spendsight.exceptions import ExtractionError
from spendsight.extractors.csv_extractor import CSVExtractor
from spendsight.models.transaction import TransactionType

SAMPLE = Path(__file__).parent.parent / "examples" / "statement" / "transactions.csv"


class TestCSVExtractor:
    @pytest.mark.asyncio
    async def test_sample_export(self) -> None:
        transactions = await CSVExtractor().extract(SAMPLE.read_bytes())

        assert len(transactions) == 12
        assert transactions[0].description == "Salary Deposit"
        assert transactions[0].type == TransactionType.CREDIT
        assert transactions[0].date == date(2024, 11, 1)
        debits = [t for t in transactions if t.is_debit]
        assert sum(t.spend for t in debits) == pytest.approx(1051.78)

    @pytest.mark.asyncio
    async def test_type_column_overrides_sign(self) -> None:
        content = b"date,description,amount,type\n2024-01-05,Rent,1200,DR\n2024-01-06,Payroll,-2500,Cr\n"
        rent, payroll = await CSVExtractor().extract(content)

        assert rent.type == TransactionType.DEBIT
        assert rent.amount == -1200
        assert payroll.type == TransactionType.CREDIT
        assert payroll.amount == 2500

    @pytest.mark.asyncio
    async def test_sign_decides_without_type_column(self) -> None:
        content = b"Posted_Date,Memo,Value\n2024-01-05,Coffee,-3.50\n2024-01-06,Refund,12.00\n"
        coffee, refund = await CSVExtractor().extract(content)

        assert coffee.type == TransactionType.DEBIT
        assert coffee.description == "Coffee"
        assert refund.type == TransactionType.CREDIT

    @pytest.mark.asyncio
    async def test_currency_strings(self) -> None:
        content = 'date,description,amount\n05 Nov 2024,Hotel,"-£1,250.00"\n'.encode()
        (txn,) = await CSVExtractor().extract(content)

        assert txn.amount == -1250.0
        assert txn.date == date(2024, 11, 5)

    @pytest.mark.asyncio
    async def test_custom_delimiter(self) -> None:
        content = b"date;description;amount\n2024-02-01;Gym;-40\n"
        transactions = await CSVExtractor(delimiter=";").extract(content)
        assert transactions[0].amount == -40

    @pytest.mark.asyncio
    async def test_skips_bad_rows(self) -> None:
        content = b"date,description,amount\n2024-02-01,ok,-1\nnot-a-date,bad,-2\n2024-02-03,,\n2024-02-04,,-4\n"
        transactions = await CSVExtractor().extract(content)

        assert [t.amount for t in transactions] == [-1, -4]
        assert transactions[1].description == ""

    @pytest.mark.asyncio
    async def test_missing_required_columns(self) -> None:
        with pytest.raises(ExtractionError, match="date and amount"):
            await CSVExtractor().extract(b"when,what\n2024-01-01,thing\n")

    @pytest.mark.asyncio
    async def test_empty_content(self) -> None:
        with pytest.raises(ExtractionError):
            await CSVExtractor().extract(b"")

    @pytest.mark.asyncio
    async def test_skips_non_finite_amounts(self) -> None:
        content = b"date,description,amount\n2024-11-01,coffee,inf\n2024-11-02,lunch restaurant,-5\n2024-11-03,tea,nan\n"
        transactions = await CSVExtractor().extract(content)

        assert [t.description for t in transactions] == ["lunch restaurant"]
        assert transactions[0].amount == -5
