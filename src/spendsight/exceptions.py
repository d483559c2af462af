"""
SpendSight exceptions.
"""

from __future__ import annotations


class SpendSightError(Exception):
    """Base class for all SpendSight errors."""


class ExtractionError(SpendSightError):
    """Transactions could not be extracted from the given input."""


class AnalysisError(SpendSightError):
    """An analysis failed with no partial result.

    The message is always the same generic text; the underlying cause is kept
    in ``__cause__`` and in the logs.
    """

    def __init__(self, message: str = "Failed to parse bank statement") -> None:
        super().__init__(message)


class StorageError(SpendSightError):
    """Analysis history could not be written."""
