"""Structlog configuration for the application.

Console output with colors when a human is watching, JSON lines otherwise.
"""

import logging
import os
import sys

import structlog

_TRUTHY = ("1", "true", "yes")


def _wants_colors() -> bool:
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    if os.environ.get("FORCE_COLOR", "").lower() in _TRUTHY:
        return True
    return sys.stdout.isatty()


def configure_logging(level: str = "info") -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum log level name (debug, info, warning, error).
            Unknown names fall back to info.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if _wants_colors():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        )

    min_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
