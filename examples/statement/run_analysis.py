"""
Example: Analyze a bank statement.

Run (plain-text statement, parsed locally):
    python examples/statement/run_analysis.py

Run (CSV export):
    python examples/statement/run_analysis.py --csv

Run (synthetic 90-day statement, no files or network):
    python examples/statement/run_analysis.py --demo

Or via CLI:
    spendsight analyze examples/statement/statement.txt --no-save
"""

import asyncio
import sys
from pathlib import Path

# Get the directory where this script lives
SCRIPT_DIR = Path(__file__).parent.resolve()
TEXT_PATH = SCRIPT_DIR / "statement.txt"
CSV_PATH = SCRIPT_DIR / "transactions.csv"

from spendsight import StatementAnalyzer
from spendsight.config import SpendSightConfig


async def main() -> None:
    use_csv = "--csv" in sys.argv
    use_demo = "--demo" in sys.argv

    config = SpendSightConfig(
        extraction={"offline": True, "fallback_days": 90, "seed": 7},
        storage={"enabled": False},
    )
    analyzer = StatementAnalyzer(config=config)

    if use_demo:
        print("Analyzing a synthetic 90-day statement...")
        result = await analyzer.analyze_offline()
    else:
        path = CSV_PATH if use_csv else TEXT_PATH
        print(f"Analyzing {path.name}...")
        result = await analyzer.analyze_file(path)

    print()
    print(f"Period:         {result.period.start} to {result.period.end}")
    print(f"Total income:   ${result.total_income:,.2f}")
    print(f"Total spending: ${result.total_spending:,.2f}")
    print(f"Net change:     ${result.net_change:,.2f}")
    print()

    for category in sorted(result.categories, key=lambda c: c.amount, reverse=True):
        print(f"  {category.name:<20} ${category.amount:>10,.2f}  {category.percentage:5.1f}%")
    print()

    for insight in result.insights:
        print(f"[{insight.type.value}] {insight.title}: {insight.description}")

    output = SCRIPT_DIR / "analysis_report.md"
    output.write_text(result.to_markdown())
    print(f"\nReport saved to {output}")


if __name__ == "__main__":
    asyncio.run(main())
