"""
Logging setup for Sakila Reports.

Report runs log one line per report start, success, or failure, with the report
name, row count, and duration attached as `extra=` fields. On a terminal the
plain formatter is enough; scheduled runs can switch to `LOG_JSON=true` and
get one JSON object per line with those fields as top-level keys.

Usage:
    from sakila_reports.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=True)
    log = get_logger(__name__)
    log.info("[REPORT SUCCESS] store_revenue", extra={"report": "store_revenue", "rows": 2})
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}

# The pool logs every connection it opens or recycles at INFO.
_DRIVER_LOGGERS = ("psycopg", "psycopg.pool")


def _record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    extras = {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}
    # Older call sites nest their fields as `extra={"extra": {...}}`.
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        extras.update(nested)
    return extras


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as a single JSON line."""
    payload: Dict[str, Any] = {
        "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    payload.update(_record_extras(record))
    # Decimals and paths in extras are rendered as strings.
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
) -> None:
    """
    Configure root logging onto stderr.

    Stdout is left to report output (tables or `--json`), so piping
    `sakila-reports run ... --json` stays parseable.

    Parameters
    ----------
    level : str
        Logging level name (e.g., "DEBUG", "INFO", "WARNING").
    json_logs : bool
        Emit one JSON object per record instead of the console format.
    """
    level = level.upper()
    driver_level = "DEBUG" if level == "DEBUG" else "WARNING"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if json_logs else "console",
                    "level": level,
                    "stream": "ext://sys.stderr",
                }
            },
            "loggers": {name: {"level": driver_level} for name in _DRIVER_LOGGERS},
            "root": {
                "handlers": ["stderr"],
                "level": level,
            },
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
