"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Literal

import structlog

LogFormat = Literal["console", "json"]


def _resolve_level(level: str) -> int:
    """Map a level name to a logging constant, defaulting to INFO."""
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str = "INFO", format: LogFormat = "console") -> None:
    """Configure structlog for chronotunes.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: "console" for human-readable output, "json" for machine-readable
    """
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format == "json":
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    # Logs go to stderr so playlist output on stdout stays clean
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a structured logger, bound to ``name`` when given."""
    # Initial values keep the proxy lazy, so module-level loggers pick up
    # whatever configure_logging sets later
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
