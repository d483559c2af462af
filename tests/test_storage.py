"""Tests for analysis history storage."""

import json
from datetime import date
from pathlib import Path

import pytest

from spendsight.exceptions import StorageError
from spendsight.models.analysis import AnalysisResult, Period
from spendsight.models.transaction import Transaction, TransactionType
from spendsight.storage import HistoryStore


def _result(spending: float) -> AnalysisResult:
    txn = Transaction(date=date(2024, 11, 3), description="Transfer Out", amount=-spending, type=TransactionType.DEBIT)
    return AnalysisResult(
        total_spending=spending,
        net_change=-spending,
        period=Period(start="2024-11-03", end="2024-11-03"),
        transactions=[txn],
        source="text",
    )


@pytest.fixture
def store(tmp_path: Path) -> HistoryStore:
    return HistoryStore(tmp_path / "history.json", max_entries=3)


class TestHistoryStore:
    def test_empty(self, store: HistoryStore) -> None:
        assert store.get_last() is None
        assert store.get_history() == []

    def test_save_and_read_back(self, store: HistoryStore) -> None:
        entry = store.save(_result(150))

        assert len(entry.id) == 32
        assert entry.timestamp.tzinfo is not None
        assert store.get_last() == _result(150)
        history = store.get_history()
        assert len(history) == 1
        assert history[0].id == entry.id
        assert history[0].transactions[0].date == date(2024, 11, 3)

    def test_most_recent_first(self, store: HistoryStore) -> None:
        store.save(_result(1))
        store.save(_result(2))

        assert [h.total_spending for h in store.get_history()] == [2, 1]
        assert store.get_last().total_spending == 2

    def test_capped_at_max_entries(self, store: HistoryStore) -> None:
        for spending in range(1, 6):
            store.save(_result(spending))

        assert [h.total_spending for h in store.get_history()] == [5, 4, 3]

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path / "nested" / "dir" / "history.json")
        store.save(_result(10))
        assert store.path.exists()

    def test_expands_user(self) -> None:
        assert "~" not in str(HistoryStore("~/.spendsight/history.json").path)

    def test_corrupt_file_reads_as_empty(self, store: HistoryStore) -> None:
        store.path.write_text("{not json")
        assert store.get_last() is None
        assert store.get_history() == []

        store.save(_result(7))
        assert len(store.get_history()) == 1

    def test_invalid_entries_read_as_empty(self, store: HistoryStore) -> None:
        store.path.write_text('{"last_analysis": {"total_spending": "lots"}, "analysis_history": [{"id": 1}]}')
        assert store.get_last() is None
        assert store.get_history() == []

    def test_write_failure(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = HistoryStore(blocker / "history.json")

        with pytest.raises(StorageError, match="Failed to save analysis"):
            store.save(_result(1))

    def test_clear(self, store: HistoryStore) -> None:
        store.save(_result(1))
        store.clear()
        assert store.get_history() == []
        store.clear()

    def test_one_bad_entry_keeps_the_rest(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path / "history.json", max_entries=10)
        for spending in (1, 2, 3):
            store.save(_result(spending))

        data = json.loads(store.path.read_text())
        del data["analysis_history"][1]["timestamp"]
        store.path.write_text(json.dumps(data))

        assert [h.total_spending for h in store.get_history()] == [3, 1]
        store.save(_result(4))
        assert [h.total_spending for h in store.get_history()] == [4, 3, 1]
