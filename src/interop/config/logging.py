"""structlog configuration for interop.

Two output modes:
- Human (default): colored console output to stderr
- JSON (--log-json): Structured JSON lines to stderr

Levels come from ``-v`` (always DEBUG) or the ``log_level`` setting.
"""

from __future__ import annotations

import logging
import sys

import structlog

from interop.config.models import LogLevel

_LEVELS: dict[LogLevel, int] = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
}


def level_for(level: LogLevel | str, *, verbose: bool = False) -> int:
    """Map a configured level name to a stdlib logging level."""
    if verbose:
        return logging.DEBUG
    return _LEVELS.get(LogLevel(level), logging.WARNING)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    level: LogLevel | str = LogLevel.WARNING,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Force DEBUG-level output regardless of *level*.
        log_json: Use JSON renderer instead of console renderer.
        level: The ``log_level`` value from settings.
    """
    interop_level = level_for(level, verbose=verbose)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("interop").setLevel(interop_level)
    logging.getLogger("mcp").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
