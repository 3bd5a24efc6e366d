"""
Report runner: executes catalog reports on a caller-supplied connection.

The runner never opens, commits, or closes connections. It works with any
DB-API 2.0 connection (psycopg in production), sends the catalog query text
unchanged, and returns the rows as immutable models in the order the engine
produced them.

Example
-------
    from sakila_reports.infrastructure.db_factory import get_sync_connection
    from sakila_reports.reports.runner import ReportRunner

    with get_sync_connection() as conn:
        rows = ReportRunner(conn).run("store_revenue")
"""

from __future__ import annotations

import time
from contextlib import closing
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from pydantic import ValidationError

from sakila_reports.domain.models import ReportRow
from sakila_reports.reports.catalog import ReportDefinition, get_report
from sakila_reports.reports.errors import QueryError
from sakila_reports.utils.logging import get_logger

log = get_logger(__name__)

LIST_TABLES_SQL = """
SELECT table_name
FROM information_schema.tables
WHERE table_schema = current_schema() AND table_type = 'BASE TABLE'
ORDER BY table_name
"""


def _fetch(connection: Any, sql: str) -> Tuple[List[str], List[Sequence[Any]]]:
    """Execute `sql` without parameters and return (column names, rows)."""
    with closing(connection.cursor()) as cur:
        cur.execute(sql)
        if cur.description is None:
            raise ValueError("statement returned no result set")
        columns = [column[0] for column in cur.description]
        return columns, cur.fetchall()


def _to_rows(
    definition: ReportDefinition, columns: List[str], raw_rows: Iterable[Sequence[Any]]
) -> List[ReportRow]:
    if tuple(columns) != definition.columns:
        raise QueryError(
            definition.name,
            detail=f"expected columns {list(definition.columns)}, got {columns}",
        )
    try:
        return [definition.row_model.model_validate(dict(zip(columns, raw))) for raw in raw_rows]
    except ValidationError as exc:
        raise QueryError(definition.name, exc) from exc


class ReportRunner:
    """
    Run named reports against a DB-API connection.

    Parameters
    ----------
    connection : DB-API 2.0 connection
        Open connection to a database hosting the Sakila schema. The caller
        owns its lifecycle and transaction state.
    """

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    def run(self, name: str) -> List[ReportRow]:
        """
        Execute report `name` and return its rows in engine order.

        Raises
        ------
        UnknownReport
            If `name` is not part of the catalog.
        QueryError
            If the engine fails to execute the query, or returns a result that
            does not match the report's output shape.
        """
        definition = get_report(name)
        log.debug("Running report %s", name, extra={"report": name})
        start = time.perf_counter()
        try:
            columns, raw_rows = _fetch(self._connection, definition.sql)
        except Exception as exc:  # noqa: BLE001 - any driver failure is a query failure
            raise QueryError(name, exc) from exc

        rows = _to_rows(definition, columns, raw_rows)
        log.debug(
            "Report %s returned %d row(s)",
            name,
            len(rows),
            extra={
                "report": name,
                "rows": len(rows),
                "duration_seconds": round(time.perf_counter() - start, 3),
            },
        )
        return rows

    def run_many(self, names: Iterable[str]) -> Dict[str, List[ReportRow]]:
        """
        Run several reports on the same connection, in the given order.

        All names are checked against the catalog before any query runs.
        """
        requested = list(names)
        for name in requested:
            get_report(name)
        return {name: self.run(name) for name in requested}

    def list_tables(self) -> List[str]:
        """
        List base tables in the connection's current schema, sorted by name.
        """
        try:
            _, raw_rows = _fetch(self._connection, LIST_TABLES_SQL)
        except Exception as exc:  # noqa: BLE001 - any driver failure is a query failure
            raise QueryError("list_tables", exc) from exc
        return [row[0] for row in raw_rows]


__all__ = ["ReportRunner", "LIST_TABLES_SQL"]
