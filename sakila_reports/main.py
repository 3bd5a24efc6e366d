from __future__ import annotations

import json
import sys
from typing import List, Optional

import psycopg
import typer

from sakila_reports.config import get_settings
from sakila_reports.infrastructure.db_factory import get_sync_connection
from sakila_reports.orchestrator import run_reports
from sakila_reports.reporter import print_catalog, print_results
from sakila_reports.reports.catalog import available_reports, get_report
from sakila_reports.reports.errors import QueryError, UnknownReport
from sakila_reports.reports.runner import ReportRunner
from sakila_reports.utils.logging import configure_logging

app = typer.Typer(help="Sakila Reports CLI.")

EXIT_QUERY_ERROR = 1
EXIT_UNKNOWN_REPORT = 2


def _setup_logging() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    schema = settings.db_schema or "<default>"
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} "
        f"schema={schema} | concurrency={settings.report_concurrency} "
        f"log_level={settings.log_level}"
    )


@app.command("list")
def list_reports() -> None:
    """
    List the reports in the catalog.
    """
    print_catalog([(name, get_report(name).description) for name in available_reports()])


@app.command()
def tables() -> None:
    """
    List base tables in the configured database schema.
    """
    _setup_logging()
    try:
        with get_sync_connection() as conn:
            names = ReportRunner(conn).list_tables()
    except QueryError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_QUERY_ERROR) from exc
    except psycopg.OperationalError as exc:
        typer.echo(f"Database unavailable: {exc}", err=True)
        raise typer.Exit(code=EXIT_QUERY_ERROR) from exc
    for name in names:
        typer.echo(name)


@app.command()
def run(
    reports: List[str] = typer.Argument(
        ...,
        help="Report name(s) to run, or 'all' for the whole catalog.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON instead of tables."),
    persist: bool = typer.Option(
        False, "--persist", help="Write results to the results directory."
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency",
        "-c",
        help="Reports to run at once (default from settings).",
    ),
) -> None:
    """
    Run one or more reports and print their rows.
    """
    _setup_logging()
    names = ["all"] if "all" in reports else reports
    try:
        results = run_reports(report_names=names, concurrency=concurrency, persist=persist)
    except UnknownReport as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_UNKNOWN_REPORT) from exc
    except QueryError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_QUERY_ERROR) from exc
    except psycopg.OperationalError as exc:
        typer.echo(f"Database unavailable: {exc}", err=True)
        raise typer.Exit(code=EXIT_QUERY_ERROR) from exc

    if as_json:
        typer.echo(json.dumps(results, indent=2))
    else:
        print_results(results)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
