"""
Markdown report exporter.

Generates a readable Markdown summary of an AnalysisResult, suitable for
GitHub, Notion, or any Markdown viewer.
"""

from __future__ import annotations

from spendsight.models.analysis import AnalysisResult, InsightType

CURRENCY_SYMBOLS = {"USD": "$", "GBP": "£", "EUR": "€", "JPY": "¥", "INR": "₹"}


def symbol_for(currency: str) -> str:
    """Symbol for an ISO currency code; unknown codes are used as a prefix."""
    return CURRENCY_SYMBOLS.get(currency.upper(), f"{currency} ")


def render_markdown(result: AnalysisResult, currency_symbol: str = "$") -> str:
    """Render an AnalysisResult as Markdown."""
    lines: list[str] = []

    def money(value: float) -> str:
        sign = "-" if value < 0 else ""
        return f"{sign}{currency_symbol}{abs(value):,.2f}"

    # Header
    lines.append("# 💳 SpendSight Statement Analysis")
    lines.append("")
    if result.period.start and result.period.end:
        lines.append(f"*Period: {result.period.start} to {result.period.end}*")
    else:
        lines.append("*Period: no transactions*")
    lines.append("")

    # Summary
    lines.append("## 📊 Summary")
    lines.append("")
    lines.append("| Metric | Value |")
    lines.append("|--------|-------|")
    lines.append(f"| **Total Income** | {money(result.total_income)} |")
    lines.append(f"| **Total Spending** | {money(result.total_spending)} |")
    lines.append(f"| **Net Change** | {money(result.net_change)} |")
    lines.append(f"| **Transactions** | {len(result.transactions)} |")
    lines.append("")

    # Categories, largest first
    if result.categories:
        lines.append("## 🗂️ Spending by Category")
        lines.append("")
        lines.append("| Category | Amount | Share | Transactions |")
        lines.append("|----------|-------:|------:|-------------:|")
        for category in sorted(result.categories, key=lambda c: c.amount, reverse=True):
            lines.append(
                f"| {category.name} | {money(category.amount)} | "
                f"{category.percentage:.1f}% | {len(category.transactions)} |"
            )
        lines.append("")

    # Insights
    type_emoji = {
        InsightType.ALERT: "⚠️",
        InsightType.SAVINGS: "💰",
        InsightType.SPENDING: "🛒",
        InsightType.TREND: "📈",
    }
    lines.append("## 💡 Insights")
    lines.append("")
    if result.insights:
        for insight in result.insights:
            lines.append(f"- {type_emoji[insight.type]} **{insight.title}**: {insight.description}")
    else:
        lines.append("No insights for this statement.")
    lines.append("")

    lines.append("---")
    lines.append(f"*Source: {result.source}*")
    lines.append("")

    return "\n".join(lines)
