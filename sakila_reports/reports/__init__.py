"""
Reports package for Sakila Reports.

Re-exports the catalog, the runner, and the error types so downstream code can
import from `sakila_reports.reports` directly.
"""

from sakila_reports.reports.catalog import ReportDefinition, available_reports, get_report
from sakila_reports.reports.errors import QueryError, ReportError, UnknownReport
from sakila_reports.reports.runner import ReportRunner

__all__ = [
    # Catalog
    "ReportDefinition",
    "available_reports",
    "get_report",
    # Runner
    "ReportRunner",
    # Errors
    "QueryError",
    "ReportError",
    "UnknownReport",
]
