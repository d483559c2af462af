"""Extractors package — turn statement content into transactions."""
from spendsight.extractors.base import BaseExtractor
from spendsight.extractors.csv_extractor import CSVExtractor
from spendsight.extractors.remote import RemoteExtractor
from spendsight.extractors.statement_lines import StatementLineParser, TextExtractor
from spendsight.extractors.synthetic import SyntheticExtractor

__all__ = [
    "BaseExtractor",
    "CSVExtractor",
    "RemoteExtractor",
    "StatementLineParser",
    "SyntheticExtractor",
    "TextExtractor",
]
