"""
Error types raised by the report runner.

Two failure kinds reach callers: the requested report is not in the catalog,
or the engine failed to execute a catalog query. Neither is retried.
"""

from __future__ import annotations

from typing import Iterable, List, Optional


class ReportError(Exception):
    """Base class for report failures."""


class UnknownReport(ReportError):
    """Raised when a report name is not part of the catalog."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.name = name
        self.available: List[str] = sorted(available)
        message = f"Unknown report '{name}'."
        if self.available:
            message += f" Available: {', '.join(self.available)}"
        super().__init__(message)


class QueryError(ReportError):
    """
    Raised when the engine rejects or fails to execute a report query.

    The driver exception is kept on `cause` and chained as `__cause__`.
    """

    def __init__(self, report: str, cause: Optional[BaseException] = None, detail: str = "") -> None:
        self.report = report
        self.cause = cause
        reason = detail or (f"{type(cause).__name__}: {cause}" if cause is not None else "failed")
        super().__init__(f"Report '{report}' failed: {reason}")


__all__ = ["ReportError", "UnknownReport", "QueryError"]
