"""
Fixture loading script for Sakila Reports.

Loads the minimal Sakila-shaped dataset in `db/mini_sakila.sql` into a
dedicated PostgreSQL schema, so reports can be tried out (and integration
tests run) without a full Sakila import. Point the CLI at it with
`DB_SCHEMA=<schema>`.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path

import psycopg
import typer
from psycopg import sql

from sakila_reports.infrastructure.db_factory import build_dsn

FIXTURE_SQL_PATH = Path(__file__).resolve().parent.parent / "db" / "mini_sakila.sql"
DEFAULT_SCHEMA = "mini_sakila"

app = typer.Typer(help="Load the mini Sakila fixture into Postgres.")


def _build_dsn(dsn_override: str | None) -> str:
    if dsn_override:
        return dsn_override
    return build_dsn()


def _drop_schema(schema: str) -> sql.Composed:
    return sql.SQL("DROP SCHEMA IF EXISTS {} CASCADE").format(sql.Identifier(schema))


def read_fixture_sql(path: Path = FIXTURE_SQL_PATH) -> str:
    return path.read_text(encoding="utf-8")


def load_fixture(dsn: str, schema: str = DEFAULT_SCHEMA, replace: bool = False) -> None:
    """
    Create `schema` and load the fixture tables and rows into it.

    With `replace`, an existing schema of that name is dropped first.
    """
    with psycopg.connect(dsn) as conn:
        with conn.cursor() as cur:
            if replace:
                cur.execute(_drop_schema(schema))
            cur.execute(sql.SQL("CREATE SCHEMA {}").format(sql.Identifier(schema)))
            cur.execute(sql.SQL("SET search_path TO {}").format(sql.Identifier(schema)))
            cur.execute(read_fixture_sql())
        conn.commit()


def drop_fixture(dsn: str, schema: str = DEFAULT_SCHEMA) -> None:
    with psycopg.connect(dsn) as conn:
        with conn.cursor() as cur:
            cur.execute(_drop_schema(schema))
        conn.commit()


@app.command()
def main(
    schema: str = typer.Option(
        DEFAULT_SCHEMA,
        "--schema",
        "-s",
        help="Schema to create and load the fixture into.",
    ),
    replace: bool = typer.Option(
        False,
        "--replace",
        help="Drop the schema first if it already exists.",
    ),
    dsn: str | None = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
) -> None:
    """
    Load the mini Sakila fixture into a Postgres schema.
    """
    start = time.perf_counter()
    typer.echo(f"Loading {FIXTURE_SQL_PATH.name} into schema '{schema}'...")
    load_fixture(_build_dsn(dsn), schema=schema, replace=replace)
    typer.echo(
        f"Load completed in {time.perf_counter() - start:.2f}s. "
        f"Run reports with DB_SCHEMA={schema}."
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
