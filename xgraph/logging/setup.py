"""Structlog configuration for xgraph.

Log lines go to stderr so CLI tables and JSON on stdout stay pipeable.
"""

import logging
import sys

import structlog

from xgraph.config import ClientConfig, LogFormat


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _render_processors(log_format: LogFormat) -> list:
    if log_format == LogFormat.JSON:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.set_exc_info, structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(config: ClientConfig | None = None) -> None:
    """
    Route structlog output to stderr at the configured level and format.

    Safe to call more than once; GraphClient calls it on every ``async with``.

    Args:
        config: ClientConfig providing log_level and log_format, defaults if None
    """
    config = config or ClientConfig()
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    structlog.configure(
        processors=_shared_processors() + _render_processors(config.log_format),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # Loggers are created at import time, before configure_logging runs
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Logger bound with ``logger_name`` when a name is given."""
    logger = structlog.get_logger()
    return logger.bind(logger_name=name) if name else logger
