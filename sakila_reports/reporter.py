from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.table import Table

from sakila_reports.orchestrator import ReportSummary
from sakila_reports.reports.catalog import get_report

_NUMERIC_TYPES = (int, float, Decimal)


def _numeric_columns(report: str) -> frozenset:
    fields = get_report(report).row_model.model_fields
    return frozenset(name for name, field in fields.items() if field.annotation in _NUMERIC_TYPES)


def build_report_table(summary: ReportSummary) -> Table:
    """
    Render one report summary as a rich table.

    Columns typed as numbers on the row model are right-justified; row order
    is kept as returned.
    """
    numeric = _numeric_columns(summary["report"])
    table = Table(
        title=f"{summary['report']}\n[dim]{summary['description']}[/dim]",
        box=box.ROUNDED,
        caption=f"{summary['row_count']} row(s) in {summary['duration_seconds']:.3f}s",
    )

    for column in summary["columns"]:
        if column in numeric:
            table.add_column(column, justify="right", style="magenta")
        else:
            table.add_column(column, style="cyan")

    for row in summary["rows"]:
        cells = [row.get(column) for column in summary["columns"]]
        table.add_row(*("" if cell is None else str(cell) for cell in cells))

    return table


def print_results(results: List[ReportSummary], console: Optional[Console] = None) -> None:
    """
    Render report results as rich tables, one per report.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    for summary in results:
        console.print(build_report_table(summary))


def print_catalog(entries: List[Tuple[str, str]], console: Optional[Console] = None) -> None:
    """Render (name, description) pairs as a table."""
    console = console or Console()
    table = Table(title="Available reports", box=box.ROUNDED)
    table.add_column("Report", style="cyan", no_wrap=True)
    table.add_column("Description")
    for name, description in entries:
        table.add_row(name, description)
    console.print(table)
