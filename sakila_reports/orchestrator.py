"""
Orchestrator for running catalog reports and persisting results.

Usage (example from CLI):
    from sakila_reports.orchestrator import run_reports

    results = run_reports(report_names=["store_revenue", "top10_rented_films"])
    print(results)

When persisted, outputs are saved to `results/` by default:
- `results/latest.json` (last run)
- `results/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, TypedDict

from sakila_reports.config import get_settings
from sakila_reports.infrastructure.db_factory import pooled_connection
from sakila_reports.reports.catalog import available_reports, get_report
from sakila_reports.reports.runner import ReportRunner
from sakila_reports.utils.logging import get_logger

log = get_logger(__name__)

ConnectionScope = Callable[[], AbstractContextManager[Any]]


class ReportSummary(TypedDict):
    """Result of a single report run, ready for JSON serialization."""

    report: str
    description: str
    columns: List[str]
    row_count: int
    duration_seconds: float
    rows: List[Dict[str, Any]]


def resolve_report_names(report_names: Optional[Iterable[str]]) -> List[str]:
    """
    Expand `None` or `["all"]` to the whole catalog and validate the rest.

    Raises UnknownReport for the first name that is not in the catalog.
    """
    names = list(report_names) if report_names is not None else ["all"]
    if names == ["all"]:
        return available_reports()
    for name in names:
        get_report(name)
    return names


def _run_one(runner: ReportRunner, name: str) -> ReportSummary:
    definition = get_report(name)
    log.info(f"[REPORT START] {name}", extra={"report": name})
    start = time.perf_counter()
    try:
        rows = runner.run(name)
    except Exception:
        log.exception(f"[REPORT FAILED] {name}", extra={"report": name})
        raise
    duration = time.perf_counter() - start
    log.info(
        f"[REPORT SUCCESS] {name}",
        extra={"report": name, "rows": len(rows), "duration": round(duration, 3)},
    )
    return ReportSummary(
        report=name,
        description=definition.description,
        columns=list(definition.columns),
        row_count=len(rows),
        duration_seconds=round(duration, 3),
        rows=[row.model_dump(mode="json") for row in rows],
    )


def _run_in_own_connection(connection_scope: ConnectionScope, name: str) -> ReportSummary:
    with connection_scope() as conn:
        return _run_one(ReportRunner(conn), name)


def _persist_results(payload: dict, results_dir: Path) -> None:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})


def run_reports(
    report_names: Optional[Iterable[str]] = None,
    connection_scope: Optional[ConnectionScope] = None,
    concurrency: Optional[int] = None,
    results_dir: Path | str | None = None,
    persist: bool = False,
) -> List[ReportSummary]:
    """
    Run one or more reports and optionally persist the results.

    Parameters
    ----------
    report_names : iterable[str] | None
        Report names to execute. If None or ["all"], executes the whole catalog.
    connection_scope : callable | None
        Zero-argument callable returning a context manager that yields a
        connection. Defaults to borrowing from the shared pool.
    concurrency : int | None
        Number of reports to run at once, each on its own connection.
        Defaults to settings.report_concurrency.
    results_dir : Path | str | None
        Directory to store JSON artifacts. Defaults to settings.results_dir.
    persist : bool
        Whether to write results to disk.

    Returns
    -------
    List[ReportSummary]
        One summary per report, in the requested order.

    Raises
    ------
    UnknownReport
        Before anything runs, if a name is not in the catalog.
    QueryError
        As soon as a report fails; no partial results are returned.
    """
    settings = get_settings()
    names = resolve_report_names(report_names)
    scope = connection_scope or pooled_connection
    workers = max(1, concurrency if concurrency is not None else settings.report_concurrency)

    log.info(
        f"[ORCHESTRATOR] Running {len(names)} report(s)",
        extra={"reports": names, "concurrency": workers},
    )

    if workers == 1 or len(names) <= 1:
        with scope() as conn:
            runner = ReportRunner(conn)
            results = [_run_one(runner, name) for name in names]
    else:
        with ThreadPoolExecutor(max_workers=min(workers, len(names))) as executor:
            futures = [executor.submit(_run_in_own_connection, scope, name) for name in names]
            results = [future.result() for future in futures]

    if persist:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "reports": names,
            "results": results,
        }
        _persist_results(payload, Path(results_dir or settings.results_dir))

    log.info(
        f"[ORCHESTRATOR COMPLETE] {len(names)} report(s) executed",
        extra={"reports": names},
    )
    return results


__all__ = [
    "ReportSummary",
    "resolve_report_names",
    "run_reports",
]
