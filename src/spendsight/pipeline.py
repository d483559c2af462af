"""
SpendSight — Analysis orchestrator.

The StatementAnalyzer sequences extraction, categorization, aggregation and
insight generation, and is the only place where extraction failures are
recovered from (one synthetic fallback, no further retries).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from spendsight.analyzers.aggregator import aggregate_categories, total_income, total_spending
from spendsight.analyzers.categorizer import categorize_transactions
from spendsight.analyzers.insights import InsightEngine
from spendsight.config import SpendSightConfig
from spendsight.exceptions import AnalysisError, ExtractionError, StorageError
from spendsight.extractors.csv_extractor import CSVExtractor
from spendsight.extractors.remote import RemoteExtractor
from spendsight.extractors.statement_lines import TextExtractor
from spendsight.extractors.synthetic import SyntheticExtractor
from spendsight.models.analysis import AnalysisResult, Period

if TYPE_CHECKING:
    from spendsight.extractors.base import BaseExtractor
    from spendsight.models.transaction import Transaction
    from spendsight.storage import HistoryStore

logger = logging.getLogger("spendsight")

REMOTE_FILE_TYPES = frozenset({"pdf"})
LOCAL_FILE_TYPES = frozenset({"txt", "csv"})


@dataclass
class StatementAnalyzer:
    """Top-level orchestrator for statement analysis.

    Usage::

        from spendsight import StatementAnalyzer

        analyzer = StatementAnalyzer.from_config("spendsight.yaml")
        result = await analyzer.analyze_file("statement.pdf")
        print(result.to_markdown())

    The analyzer coordinates:
    - **Extractors**: remote PDF parsing, text lines, CSV, synthetic fallback.
    - **Analyzers**: categorization, aggregation, insight rules.
    - **Storage**: optional history of past results.
    """

    config: SpendSightConfig = field(default_factory=SpendSightConfig)
    remote: BaseExtractor | None = None
    fallback: BaseExtractor | None = None
    insight_engine: InsightEngine = field(default_factory=InsightEngine)
    store: HistoryStore | None = None

    def __post_init__(self) -> None:
        extraction = self.config.extraction
        if self.remote is None:
            self.remote = RemoteExtractor(extraction.service_url, timeout=extraction.timeout)
        if self.fallback is None:
            self.fallback = SyntheticExtractor(days=extraction.fallback_days, seed=extraction.seed)

    @classmethod
    def from_config(cls, config_path: str | None = None, **overrides: Any) -> StatementAnalyzer:
        """Create an analyzer (with history storage if enabled) from config."""
        from spendsight.storage import HistoryStore

        config = SpendSightConfig.load(config_path, **overrides)
        store = None
        if config.storage.enabled:
            store = HistoryStore(config.storage.history_path, max_entries=config.storage.max_entries)
        return cls(config=config, store=store)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    async def analyze_file(self, path: str | Path, *, timeout: float | None = None) -> AnalysisResult:
        """Analyze a statement file; its extension selects the extractor.

        ``timeout`` overrides the configured parse service timeout for this call.
        """
        file_path = Path(path)
        try:
            content = file_path.read_bytes()
        except OSError as e:
            logger.error("Cannot read statement %s: %s", file_path, e)
            raise AnalysisError() from e
        return await self.analyze_bytes(content, file_path.suffix.lstrip("."), timeout=timeout)

    def analyze_file_sync(self, path: str | Path) -> AnalysisResult:
        """Synchronous wrapper around :meth:`analyze_file`."""

        async def _run() -> AnalysisResult:
            try:
                return await self.analyze_file(path)
            finally:
                await self.close()

        return asyncio.run(_run())

    async def analyze_bytes(
        self,
        content: bytes | None,
        file_type: str,
        *,
        timeout: float | None = None,
    ) -> AnalysisResult:
        """Analyze raw statement content of the given type (pdf, txt, csv)."""
        if not content:
            logger.error("No statement content provided")
            raise AnalysisError() from ExtractionError("No statement content provided")

        kind = file_type.lower().lstrip(".")
        if kind in REMOTE_FILE_TYPES:
            transactions, source = await self._extract_remote(content, timeout)
        elif kind in LOCAL_FILE_TYPES:
            extractor: BaseExtractor = TextExtractor() if kind == "txt" else CSVExtractor()
            try:
                transactions = await extractor.extract(content)
            except ExtractionError as e:
                logger.error("Extraction failed (%s): %s", kind, e)
                raise AnalysisError() from e
            source = extractor.name
        else:
            logger.error("Unsupported statement type: %r", file_type)
            raise AnalysisError() from ExtractionError(f"Unsupported file type: {file_type!r}")

        return self._finish(self.build_result(transactions, source=source))

    async def analyze_text(self, text: str) -> AnalysisResult:
        """Analyze plain statement text."""
        return await self.analyze_bytes(text.encode("utf-8"), "txt")

    async def analyze_transactions(self, transactions: list[Transaction]) -> AnalysisResult:
        """Analyze transactions that were extracted elsewhere."""
        return self._finish(self.build_result(transactions, source="transactions"))

    async def analyze_offline(self) -> AnalysisResult:
        """Analyze a synthetic statement without touching the network."""
        assert self.fallback is not None
        transactions = await self.fallback.extract(b"")
        return self._finish(self.build_result(transactions, source=self.fallback.name))

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def build_result(
        self,
        transactions: list[Transaction],
        *,
        source: str = "unknown",
    ) -> AnalysisResult:
        """Categorize, aggregate and derive insights for a transaction list."""
        categorized = categorize_transactions(transactions)
        categories = aggregate_categories(categorized)
        spending = total_spending(categorized)
        income = total_income(categorized)
        insights = self.insight_engine.generate(categorized, categories, spending, income)

        return AnalysisResult(
            total_spending=spending,
            total_income=income,
            net_change=income - spending,
            categories=categories,
            insights=insights,
            period=extract_period(categorized),
            transactions=categorized,
            source=source,
        )

    async def _extract_remote(
        self,
        content: bytes,
        timeout: float | None = None,
    ) -> tuple[list[Transaction], str]:
        """Remote extraction with a single synthetic fallback."""
        assert self.remote is not None and self.fallback is not None
        extraction = self.config.extraction
        limit = extraction.timeout if timeout is None else timeout

        failure: Exception | None = None
        if extraction.offline:
            failure = ExtractionError("Remote parsing disabled (offline mode)")
        else:
            try:
                transactions = await asyncio.wait_for(
                    self.remote.extract(content),
                    timeout=limit,
                )
                if transactions:
                    return transactions, self.remote.name
                failure = ExtractionError("Parse service found no transactions")
            except asyncio.TimeoutError:
                failure = ExtractionError(f"Parse service timed out after {limit:g}s")
            except ExtractionError as e:
                failure = e

        if not extraction.fallback_enabled:
            logger.error("Remote parsing failed and fallback is disabled: %s", failure)
            raise AnalysisError() from failure

        logger.warning("Remote parsing failed (%s), falling back to synthetic data", failure)
        try:
            transactions = await self.fallback.extract(content)
        except ExtractionError as e:
            logger.error("Fallback extraction failed: %s", e)
            raise AnalysisError() from e
        return transactions, self.fallback.name

    def _finish(self, result: AnalysisResult) -> AnalysisResult:
        logger.info(
            "Analysis complete: %d transactions, %d categories, %d insights",
            len(result.transactions),
            len(result.categories),
            len(result.insights),
        )
        if self.store is not None:
            try:
                self.store.save(result)
            except StorageError as e:
                logger.warning("Analysis not saved to history: %s", e)
        return result

    async def close(self) -> None:
        """Release network resources held by the remote extractor."""
        if isinstance(self.remote, RemoteExtractor):
            await self.remote.close()


def extract_period(transactions: list[Transaction]) -> Period:
    """Earliest and latest transaction dates, or empty strings."""
    if not transactions:
        return Period(start="", end="")
    dates = [t.date for t in transactions]
    return Period(start=min(dates).isoformat(), end=max(dates).isoformat())
