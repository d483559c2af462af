"""
History storage — keep recent analyses on disk.

A single JSON file holds the last analysis and a most-recent-first history
capped at ``max_entries``. Writes fail loudly; reads degrade to "nothing
stored" so a corrupt file never blocks a new analysis.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from spendsight.exceptions import StorageError
from spendsight.models.analysis import AnalysisResult, HistoryEntry

logger = logging.getLogger("spendsight.storage")

LAST_ANALYSIS_KEY = "last_analysis"
HISTORY_KEY = "analysis_history"


class HistoryStore:
    """JSON-file backed analysis history.

    Usage::

        store = HistoryStore("~/.spendsight/history.json")
        store.save(result)
        latest = store.get_last()
    """

    def __init__(self, path: str | Path, max_entries: int = 10) -> None:
        self.path = Path(path).expanduser()
        self.max_entries = max_entries

    def save(self, result: AnalysisResult) -> HistoryEntry:
        """Store ``result`` as the last analysis and prepend it to the history."""
        entry = HistoryEntry(
            **result.model_dump(),
            id=uuid.uuid4().hex,
            timestamp=datetime.now(timezone.utc),
        )
        history = [entry, *self.get_history()][: self.max_entries]
        data = {
            LAST_ANALYSIS_KEY: result.model_dump(mode="json"),
            HISTORY_KEY: [h.model_dump(mode="json") for h in history],
        }

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            logger.error("Error saving analysis to %s: %s", self.path, e)
            raise StorageError("Failed to save analysis") from e

        logger.debug("Saved analysis %s (%d in history)", entry.id, len(history))
        return entry

    def get_last(self) -> AnalysisResult | None:
        """The most recently saved analysis, if any."""
        raw = self._read().get(LAST_ANALYSIS_KEY)
        if raw is None:
            return None
        try:
            return AnalysisResult.model_validate(raw)
        except ValidationError as e:
            logger.warning("Error reading last analysis: %s", e)
            return None

    def get_history(self) -> list[HistoryEntry]:
        """Saved analyses, most recent first."""
        raw = self._read().get(HISTORY_KEY)
        if not isinstance(raw, list):
            return []

        entries: list[HistoryEntry] = []
        for item in raw:
            try:
                entries.append(HistoryEntry.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping unreadable history entry: %s", e)
        return entries

    def clear(self) -> None:
        """Remove all stored analyses."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Error clearing history at %s: %s", self.path, e)
            raise StorageError("Failed to clear history") from e

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load history from %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}
