"""Typer-based command line helpers for headless summaries and report export."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from portfolio_insights import config
from portfolio_insights.core.aggregator import PortfolioView, aggregate
from portfolio_insights.core.generator import generate
from portfolio_insights.core.validator import ValidationError
from portfolio_insights.integration.insights_client import ConfigurationMissingError, InsightsClient
from portfolio_insights.models.record import ALL, Segment
from portfolio_insights.reporting import ReportGenerator
from portfolio_insights.utils.numbers import format_currency, format_percent

app = typer.Typer(help="Retail risk and revenue portfolio analytics")
console = Console()

WEB_APP_PATH = Path(__file__).resolve().with_name("web_app.py")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_view(count: int, seed: Optional[int], segment: str, region: str) -> PortfolioView:
    records = generate(count, seed=seed)
    try:
        return aggregate(records, segment, region)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _metrics_table(view: PortfolioView) -> Table:
    metrics = view.metrics
    table = Table(title="Portfolio KPIs", show_lines=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Records", f"{len(view.filtered)} of {view.total_records}")
    table.add_row("Total Balance", format_currency(metrics.total_balance))
    table.add_row("Annual Revenue", format_currency(metrics.total_revenue))
    table.add_row("Avg Risk Score", "N/A" if metrics.is_empty else f"{metrics.avg_risk:.3f}")
    table.add_row("Default Rate", "N/A" if metrics.is_empty else format_percent(metrics.default_rate, 2))
    return table


def _segment_table(view: PortfolioView) -> Table:
    table = Table(title="Segment Performance")
    for column in ("Segment", "Balance", "Revenue", "Customers"):
        table.add_column(column, justify="left" if column == "Segment" else "right")
    for segment in Segment:
        summary = view.segments.get(segment)
        if summary is None:
            continue
        table.add_row(
            segment.value,
            format_currency(summary.balance),
            format_currency(summary.revenue),
            str(summary.count),
        )
    return table


def _region_table(view: PortfolioView) -> Table:
    total = view.metrics.total_revenue
    table = Table(title="Regional Revenue")
    for column in ("Region", "Revenue", "% of Total"):
        table.add_column(column, justify="left" if column == "Region" else "right")
    for summary in view.regions:
        share = summary.revenue / total * 100.0 if total else 0.0
        table.add_row(summary.region.value, format_currency(summary.revenue), format_percent(share))
    return table


@app.command()
def summary(
    count: int = typer.Option(config.RECORD_COUNT, help="Number of synthetic records"),
    seed: Optional[int] = typer.Option(config.RECORD_SEED, help="Random seed for reproducible data"),
    segment: str = typer.Option(ALL, help="Segment filter or 'all'"),
    region: str = typer.Option(ALL, help="Region filter or 'all'"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Print KPI, segment and region tables for a synthetic portfolio."""
    _configure_logging(verbose)
    view = _build_view(count, seed, segment, region)
    console.print(_metrics_table(view))
    console.print(_segment_table(view))
    console.print(_region_table(view))


@app.command()
def report(
    output_dir: Path = typer.Option(config.OUTPUT_ROOT, help="Directory for report exports"),
    count: int = typer.Option(config.RECORD_COUNT, help="Number of synthetic records"),
    seed: Optional[int] = typer.Option(config.RECORD_SEED, help="Random seed for reproducible data"),
    segment: str = typer.Option(ALL, help="Segment filter or 'all'"),
    region: str = typer.Option(ALL, help="Region filter or 'all'"),
    with_insights: bool = typer.Option(False, help="Request AI insights before exporting"),
    timestamped: bool = typer.Option(True, help="Write into a timestamped run folder"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Export the printable HTML report plus CSV and JSON tables."""
    _configure_logging(verbose)
    view = _build_view(count, seed, segment, region)

    insights = None
    if with_insights:
        try:
            insights = InsightsClient().summarize(view)
        except ConfigurationMissingError as exc:
            console.print(f"[yellow]{exc} Exporting without AI insights.[/yellow]")
        else:
            if insights.is_fallback:
                console.print("[yellow]Insight service unavailable; fallback guidance included.[/yellow]")

    outputs = ReportGenerator(output_dir, timestamped=timestamped).export(view, insights)
    console.print("\n[bold green]Report export complete![/bold green]")
    for name, path in outputs.items():
        console.print(f"  - {name}: {path}")


@app.command()
def serve(port: int = typer.Option(8501, help="Port for the Streamlit server")) -> None:
    """Launch the interactive Streamlit dashboard."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(WEB_APP_PATH), "--server.port", str(port)]
    sys.exit(stcli.main())


def main() -> None:
    """Entry point for CLI execution."""
    app()


if __name__ == "__main__":
    main()
