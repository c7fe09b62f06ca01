"""Structured logging utilities built on top of :mod:`structlog`.

The hooks only ever ask structlog for a logger; the process-wide structlog
configuration belongs to the host application. :func:`configure_logging` is
an opt-in JSON setup for hosts (and the test suite) that have none.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.contextvars import merge_contextvars

from .settings import get_settings

_LOGGING_CONFIGURED = False


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    normalized = level.upper()
    value = logging.getLevelName(normalized)
    if isinstance(value, int):
        return value
    raise ValueError(f"Invalid log level: {level!r}")


def configure_logging(level: str | int | None = None) -> None:
    """Configure structlog with JSON output on stdout.

    Applied once per process; later calls are no-ops.
    """

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level_value = _resolve_level(level or get_settings().log_level)

    structlog.configure(
        cache_logger_on_first_use=True,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        processors=[
            merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.processors.EventRenamer("message"),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
    )

    _LOGGING_CONFIGURED = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structured logger bound to ``name`` using the current configuration."""

    return structlog.get_logger(name)


__all__ = [
    "configure_logging",
    "get_logger",
]
