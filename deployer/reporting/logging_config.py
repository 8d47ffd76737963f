"""Structured logging configuration for runtime entrypoints."""

from __future__ import annotations

import logging

import structlog


def reporting_configure_logging(level: str = "INFO", log_format: str = "console") -> None:
    """Configure structlog processors and level filtering for the process.

    Args:
        level: Minimum log level name.
        log_format: `json` for machine-readable lines, anything else for console rendering.

    Returns:
        None: Global structlog configuration is updated as side effect.

    Raises:
        ValueError: Raised when the level name is unknown.
    """

    level_number = logging.getLevelName(level.strip().upper())
    if not isinstance(level_number, int):
        raise ValueError(f"unknown log level: {level}")

    renderer: structlog.types.Processor
    if log_format.strip().lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_number),
        cache_logger_on_first_use=False,
    )
