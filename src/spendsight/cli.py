"""
SpendSight CLI — command-line interface.

Usage:
    spendsight analyze statement.pdf
    spendsight analyze statement.txt --output report.md
    spendsight demo --days 90 --seed 7
    spendsight history
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from spendsight import __version__
from spendsight.exceptions import AnalysisError
from spendsight.models.analysis import AnalysisResult, InsightType

app = typer.Typer(
    name="spendsight",
    help="💳 SpendSight — bank statement analysis and savings insights",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]SpendSight[/bold] v{__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """💳 SpendSight — see where your money goes."""


@app.command()
def analyze(
    statement: Path = typer.Argument(..., help="Statement file (.pdf, .txt, .csv)"),
    config: str = typer.Option(
        "spendsight.yaml",
        "--config",
        "-c",
        help="Path to config file",
    ),
    offline: bool = typer.Option(
        False,
        "--offline",
        help="Skip the remote parse service and use synthetic data for PDFs",
    ),
    seed: int = typer.Option(None, "--seed", help="Seed for synthetic fallback data"),
    days: int = typer.Option(None, "--days", help="Days of synthetic fallback history: 30 or 90"),
    output: str = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file (.md or .json)",
    ),
    save: bool = typer.Option(True, "--save/--no-save", help="Store the result in history"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logs"),
) -> None:
    """Analyze a bank statement."""
    from spendsight.config import SpendSightConfig
    from spendsight.pipeline import StatementAnalyzer

    _setup_logging(verbose)
    if days is not None and days not in (30, 90):
        console.print("[red]Error: --days must be 30 or 90[/red]")
        raise typer.Exit(1)

    console.print(Panel.fit(
        "[bold blue]💳 SpendSight[/bold blue] — Statement Analysis",
        subtitle=f"v{__version__}",
    ))

    config_path = config if Path(config).exists() else None
    loaded = SpendSightConfig.load(config_path)
    extraction = loaded.extraction.model_copy(update={
        "offline": offline or loaded.extraction.offline,
        "seed": seed if seed is not None else loaded.extraction.seed,
        "fallback_days": days or loaded.extraction.fallback_days,
    })
    storage = loaded.storage.model_copy(update={"enabled": save and loaded.storage.enabled})
    analyzer = StatementAnalyzer.from_config(
        config_path,
        extraction=extraction.model_dump(),
        storage=storage.model_dump(),
    )

    try:
        with console.status("[bold green]Analyzing statement...[/bold green]"):
            result = analyzer.analyze_file_sync(statement)
    except AnalysisError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    _display_result(result)
    if output:
        _save_report(result, output, loaded.currency)


@app.command()
def demo(
    days: int = typer.Option(30, "--days", help="Days of synthetic history: 30 or 90"),
    seed: int = typer.Option(None, "--seed", help="Seed for reproducible data"),
    output: str = typer.Option(None, "--output", "-o", help="Write the report to a file"),
) -> None:
    """Analyze a synthetic statement — no files or network needed."""
    from spendsight.config import SpendSightConfig
    from spendsight.pipeline import StatementAnalyzer

    if days not in (30, 90):
        console.print("[red]Error: --days must be 30 or 90[/red]")
        raise typer.Exit(1)

    config = SpendSightConfig(
        extraction={"offline": True, "fallback_days": days, "seed": seed},
        storage={"enabled": False},
    )
    analyzer = StatementAnalyzer(config=config)
    result = asyncio.run(analyzer.analyze_offline())

    _display_result(result)
    if output:
        _save_report(result, output)


@app.command()
def history(
    config: str = typer.Option("spendsight.yaml", "--config", "-c", help="Path to config file"),
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum entries to show"),
) -> None:
    """List previously saved analyses."""
    from spendsight.config import SpendSightConfig
    from spendsight.storage import HistoryStore

    loaded = SpendSightConfig.load(config if Path(config).exists() else None)
    store = HistoryStore(loaded.storage.history_path, max_entries=loaded.storage.max_entries)
    entries = store.get_history()[:limit]

    if not entries:
        console.print("[dim]No saved analyses yet.[/dim]")
        return

    table = Table(title="Analysis History")
    table.add_column("Saved", style="bold cyan")
    table.add_column("Period")
    table.add_column("Spending", justify="right")
    table.add_column("Income", justify="right")
    table.add_column("Insights", justify="right")

    for entry in entries:
        period = f"{entry.period.start} → {entry.period.end}" if entry.period.start else "—"
        table.add_row(
            entry.timestamp.strftime("%Y-%m-%d %H:%M"),
            period,
            f"${entry.total_spending:,.2f}",
            f"${entry.total_income:,.2f}",
            str(len(entry.insights)),
        )

    console.print(table)


def _display_result(result: AnalysisResult) -> None:
    """Display analysis summary in the terminal."""
    console.print()

    table = Table(title="Statement Summary", show_lines=True)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    period = f"{result.period.start} → {result.period.end}" if result.period.start else "—"
    table.add_row("Period", period)
    table.add_row("Transactions", str(len(result.transactions)))
    table.add_row("Total Income", f"${result.total_income:,.2f}")
    table.add_row("Total Spending", f"${result.total_spending:,.2f}")
    table.add_row("Net Change", f"${result.net_change:,.2f}")
    if result.source != "remote":
        table.add_row("Source", result.source)

    console.print(table)
    console.print()

    if result.categories:
        categories = Table(title="Spending by Category")
        categories.add_column("Category", style="bold cyan")
        categories.add_column("Amount", justify="right")
        categories.add_column("Share", justify="right")
        for category in sorted(result.categories, key=lambda c: c.amount, reverse=True):
            categories.add_row(category.name, f"${category.amount:,.2f}", f"{category.percentage:.1f}%")
        console.print(categories)
        console.print()

    if result.insights:
        type_colors = {
            InsightType.ALERT: "red",
            InsightType.SAVINGS: "green",
            InsightType.SPENDING: "yellow",
            InsightType.TREND: "blue",
        }
        console.print("[bold]Insights:[/bold]")
        for i, insight in enumerate(result.insights, 1):
            color = type_colors.get(insight.type, "white")
            console.print(f"  {i}. [{color}]{insight.title}[/{color}] — {insight.description}")
        console.print()


def _save_report(result: AnalysisResult, output: str, currency: str = "USD") -> None:
    """Save report to file."""
    from spendsight.exporters import symbol_for

    path = Path(output)
    if path.suffix == ".json":
        content = result.to_json()
    else:
        content = result.to_markdown(currency_symbol=symbol_for(currency))

    path.write_text(content, encoding="utf-8")
    console.print(f"[green]✓[/green] Report saved to [bold]{path}[/bold]")


if __name__ == "__main__":
    app()
