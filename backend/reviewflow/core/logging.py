"""
Structured logging setup (structlog).

Call ``setup_logging()`` once at startup; everywhere else use::

    from reviewflow.core.logging import get_logger
    logger = get_logger(__name__)
    logger.info("Something happened", job_id=job_id)
"""

from __future__ import annotations

import logging

import structlog


def setup_logging(level: str = "INFO", *, json_output: bool | None = None) -> None:
    """Configure structlog processors and the minimum level."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    if json_output is None:
        json_output = numeric_level > logging.DEBUG

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        # ConsoleRenderer formats exc_info itself
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """
    Return a lazy logger carrying the module/component name.

    Safe at import time: configuration is resolved on first use.
    """
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()
