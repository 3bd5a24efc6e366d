"""
Database connection factory utilities for Sakila Reports.

Provides centralized management of PostgreSQL connections and a shared pool
with proper lifecycle management. The PoolManager singleton ensures the pool is
cleaned up on application exit. Every connection handed out is read-only:
reports never write.

Connection acquisition retries transient failures using tenacity. Report
queries themselves are never retried.
"""

from __future__ import annotations

import atexit
import threading
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

import psycopg
from psycopg import Connection
from psycopg_pool import ConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from sakila_reports.config import Settings, get_settings
from sakila_reports.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def connection_options(settings: Optional[Settings] = None) -> str:
    """
    Build the libpq `options` string for schema selection and statement timeout.

    Returns an empty string when neither is configured.
    """
    settings = settings or get_settings()
    options = []
    if settings.db_schema:
        options.append(f"-c search_path={settings.db_schema}")
    if settings.db_statement_timeout_ms > 0:
        options.append(f"-c statement_timeout={settings.db_statement_timeout_ms}")
    return " ".join(options)


def _connect_kwargs(settings: Optional[Settings] = None) -> Dict[str, Any]:
    options = connection_options(settings)
    return {"options": options} if options else {}


def _configure_read_only(conn: Connection) -> None:
    """Mark a fresh connection read-only; pools call this once per connection."""
    conn.read_only = True


class PoolManager:
    """
    Thread-safe singleton for managing the shared connection pool.

    Handles lifecycle management with automatic cleanup via atexit hook.
    """

    _instance: Optional["PoolManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "PoolManager":
        """Create or return the singleton instance."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._pool = None
                atexit.register(cls._instance.close_all)
            return cls._instance

    def get_pool(self, min_size: int = 1, max_size: Optional[int] = None) -> ConnectionPool:
        """
        Get or create the synchronous connection pool.

        Parameters
        ----------
        min_size : int
            Minimum number of idle connections to keep.
        max_size : int | None
            Maximum total connections in the pool. Defaults to settings.db_pool_max_size.

        Returns
        -------
        ConnectionPool
            The managed pool instance.
        """
        with self._lock:
            if self._pool is None:
                settings = get_settings()
                self._pool = ConnectionPool(
                    conninfo=build_dsn(settings),
                    min_size=min_size,
                    max_size=max(min_size, max_size or settings.db_pool_max_size),
                    kwargs=_connect_kwargs(settings),
                    configure=_configure_read_only,
                    open=True,
                )
                log.debug("Connection pool opened", extra={"db": settings.db_name})
            return self._pool

    @contextmanager
    def connection(self) -> Generator[Connection, None, None]:
        """
        Context manager for borrowing a connection from the pool.

        Example
        -------
            with PoolManager().connection() as conn:
                rows = ReportRunner(conn).run("store_revenue")
        """
        pool = self.get_pool()
        with pool.connection() as conn:
            yield conn

    def close_all(self) -> None:
        """
        Close the managed pool and release resources.

        This is called automatically on exit via atexit hook.
        """
        with self._lock:
            if self._pool is not None:
                try:
                    self._pool.close()
                except psycopg.Error:
                    log.warning("Error while closing connection pool", exc_info=True)
                finally:
                    self._pool = None


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn_override: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated read-only connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.
    Use this for one-off report runs. Prefer the pool for concurrent runs.

    Parameters
    ----------
    dsn_override : str | None
        Connect here instead of the DSN built from settings.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    conn = psycopg.connect(dsn_override or build_dsn(), **_connect_kwargs())
    _configure_read_only(conn)
    return conn


def get_sync_pool(min_size: int = 1, max_size: Optional[int] = None) -> ConnectionPool:
    """Get or create the shared connection pool via PoolManager."""
    return PoolManager().get_pool(min_size=min_size, max_size=max_size)


@contextmanager
def pooled_connection() -> Generator[Connection, None, None]:
    """Borrow a read-only connection from the shared pool."""
    with PoolManager().connection() as conn:
        yield conn


__all__ = [
    "PoolManager",
    "build_dsn",
    "connection_options",
    "get_sync_connection",
    "get_sync_pool",
    "pooled_connection",
]
