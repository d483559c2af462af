"""
SpendSight — statement-to-insight analysis.

Upload a bank statement, get categorized spending and savings insights.
"""

__version__ = "0.3.0"
__all__ = ["StatementAnalyzer"]

from spendsight.pipeline import StatementAnalyzer  # noqa: E402
