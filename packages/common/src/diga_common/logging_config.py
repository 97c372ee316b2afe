"""Structured logging setup.

All log output goes to stderr. Standard output is reserved for the JSON
document when the adapter runs with ``--output-file -``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from diga_common.config import get_settings


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure structlog for the current process.

    Args:
        level: Log level name, defaults to ``Settings.log_level``
        fmt: ``console`` or ``json``, defaults to ``Settings.log_format``
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    fmt = (fmt or settings.log_format).lower()

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # sys.stderr is re-read on every configure call
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None) -> structlog.typing.FilteringBoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
