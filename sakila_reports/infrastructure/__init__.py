"""
Infrastructure package for Sakila Reports.

Centralizes database connectivity concerns (DSN, read-only connections,
pooling). Keep this layer focused on I/O and resource management, decoupled
from the report catalog and runner.
"""

from sakila_reports.infrastructure.db_factory import (
    PoolManager,
    build_dsn,
    get_sync_connection,
    get_sync_pool,
    pooled_connection,
)

__all__ = [
    "PoolManager",
    "build_dsn",
    "get_sync_connection",
    "get_sync_pool",
    "pooled_connection",
]
