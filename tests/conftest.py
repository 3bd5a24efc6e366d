"""
Pytest configuration for Sakila Reports.

Provides fixtures for:
- Settings override for tests
- A file-backed SQLite copy of the mini Sakila fixture (no server needed)
- PostgreSQL connection management and fixture seeding for integration tests
"""

from __future__ import annotations

import os
import sqlite3
import uuid
from contextlib import closing, contextmanager
from pathlib import Path
from types import SimpleNamespace
from typing import Callable, Generator, Iterator

import psycopg
import pytest

from sakila_reports.config import Settings, get_settings
from scripts.seed_fixture import drop_fixture, load_fixture, read_fixture_sql


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    """Make every test see settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "sakila_reports_test"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


# --- Expected report output for db/mini_sakila.sql ---------------------------


@pytest.fixture(scope="session")
def mini_sakila_expected() -> SimpleNamespace:
    """
    Report output the mini Sakila fixture must produce, on any engine.

    Decimal columns are listed as floats; compare with pytest.approx.
    """
    return SimpleNamespace(
        category_film_counts={
            "Action": 2,
            "Animation": 2,
            "Children": 1,
            "Classics": 1,
            "Comedy": 1,
            "Documentary": 0,
            "Drama": 1,
        },
        film_category_rows=8,
        store_locations={(1, "Lethbridge", "Canada"), (2, "Woodridge", "Australia")},
        store_revenue={1: 24.93, 2: 19.94},
        avg_runtime=[
            ("Action", 127.5),
            ("Classics", 117.0),
            ("Comedy", 114.0),
            ("Drama", 63.0),
            ("Children", 62.0),
            ("Animation", 49.0),
        ],
        top_rented=[
            ("ACADEMY DINOSAUR", 4),
            ("ACE GOLDFINGER", 3),
            ("ADAPTATION HOLES", 3),
            ("AGENT TRUMAN", 2),
            ("AFFAIR PREJUDICE", 1),
            ("ALABAMA DEVIL", 1),
            ("ALADDIN CALENDAR", 1),
        ],
        academy_dinosaur_store1=[("ACADEMY DINOSAUR", 1, 1)],
        availability=[
            ("ACADEMY DINOSAUR", "Available"),
            ("ACE GOLDFINGER", "Available"),
            ("ADAPTATION HOLES", "NOT available"),
            ("AFFAIR PREJUDICE", "Available"),
            ("AGENT TRUMAN", "Available"),
            ("AIRPLANE SIERRA", "NOT available"),
            ("ALABAMA DEVIL", "Available"),
            ("ALADDIN CALENDAR", "NOT available"),
        ],
        tables=[
            "address",
            "category",
            "city",
            "country",
            "film",
            "film_category",
            "inventory",
            "payment",
            "rental",
            "store",
        ],
    )


# --- SQLite fixture database -------------------------------------------------


@pytest.fixture(scope="session")
def sqlite_fixture_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """
    Build the mini Sakila fixture once per session in a SQLite file.
    """
    path = tmp_path_factory.mktemp("mini_sakila") / "mini_sakila.db"
    with closing(sqlite3.connect(path)) as conn:
        conn.executescript(read_fixture_sql())
        conn.commit()
    return path


@pytest.fixture()
def sqlite_connection(sqlite_fixture_path: Path) -> Iterator[sqlite3.Connection]:
    """A fresh connection to the SQLite fixture database."""
    conn = sqlite3.connect(sqlite_fixture_path)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture()
def sqlite_scope(sqlite_fixture_path: Path) -> Callable[[], object]:
    """
    Connection scope factory for the orchestrator: each call opens its own
    connection, so scopes can be used from worker threads.
    """

    @contextmanager
    def _scope() -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(sqlite_fixture_path)
        try:
            yield conn
        finally:
            conn.close()

    return _scope


# --- PostgreSQL (integration) ------------------------------------------------


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def pg_fixture_schema(test_dsn: str, db_connection_available: bool) -> Generator[str, None, None]:
    """
    Load the mini Sakila fixture into a throwaway schema and drop it afterwards.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    schema = f"mini_sakila_{uuid.uuid4().hex[:8]}"
    load_fixture(test_dsn, schema=schema)
    try:
        yield schema
    finally:
        drop_fixture(test_dsn, schema=schema)


@pytest.fixture()
def pg_connection(test_dsn: str, pg_fixture_schema: str) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a read-only connection whose search_path points at the fixture schema.
    """
    conn = psycopg.connect(test_dsn, options=f"-c search_path={pg_fixture_schema}")
    conn.read_only = True
    try:
        yield conn
    finally:
        conn.close()
