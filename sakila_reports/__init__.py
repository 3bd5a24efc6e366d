"""
Sakila Reports - fixed analytical reports over the Sakila video-rental schema.

This package runs a catalog of read-only SQL reports against a database hosting
the Sakila sample schema, including:

- Films per category and average running time per category
- Store locations and revenue per store
- Most rented films
- Title availability across inventory

Reports are parameterless; each returns immutable rows in the order the
engine produces them.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from sakila_reports.config import Settings, get_settings
from sakila_reports.orchestrator import ReportSummary, run_reports
from sakila_reports.reports import (
    QueryError,
    ReportDefinition,
    ReportError,
    ReportRunner,
    UnknownReport,
    available_reports,
    get_report,
)
from sakila_reports.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Reports
    "ReportDefinition",
    "ReportRunner",
    "available_reports",
    "get_report",
    # Orchestration
    "ReportSummary",
    "run_reports",
    # Errors
    "QueryError",
    "ReportError",
    "UnknownReport",
    # Logging
    "configure_logging",
    "get_logger",
]
