"""
Structured logging for txpool.

Loggers write to stderr so command output on stdout stays machine-readable.
Importing txpool does not configure structlog; the CLI calls
configure_logging() on start and embedding applications configure their own.
The level comes from TXPOOL_LOG_LEVEL (default: WARNING); the CLI raises it
to DEBUG with --verbose. TXPOOL_LOG_FORMAT=json switches to JSON lines.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Optional

import structlog

DEFAULT_LEVEL = "WARNING"


def _level_value(level: str) -> int:
    return getattr(logging, level.upper(), logging.WARNING)


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure structlog. Safe to call more than once; the last call wins."""
    level = level or os.getenv("TXPOOL_LOG_LEVEL", DEFAULT_LEVEL)
    fmt = (fmt or os.getenv("TXPOOL_LOG_FORMAT", "console")).strip().lower()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_value(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a lazy structured logger carrying the module name.

    The logger resolves the configuration on each call, so a later
    configure_logging() also applies to module-level loggers.
    """
    return structlog.get_logger(logger_name=name)
