"""
Utilities package for Sakila Reports.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of report-specific logic.
"""

from sakila_reports.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
