"""Structured logging setup for the command-line entry point.

Library components never configure logging themselves; they accept a logger
argument and fall back to ``structlog.get_logger``.
"""

import logging
import sys
from typing import Any

import structlog

LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(name: str | None) -> int:
    """Map a level name to a stdlib level, defaulting to INFO."""
    return LOG_LEVELS.get((name or "").lower(), logging.INFO)


def configure_logging(log_level: str | None = "info") -> None:
    """Configure structlog to render key-value lines on stderr."""
    level = resolve_level(log_level)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)


def get_logger(name: str, logger: Any = None) -> Any:
    """Return the injected logger, or a module logger when none was given."""
    if logger is not None:
        return logger
    return structlog.get_logger(name)
