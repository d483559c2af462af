"""Exporters package — render analysis results."""
from spendsight.exporters.markdown import render_markdown, symbol_for

__all__ = ["render_markdown", "symbol_for"]
