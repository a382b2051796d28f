"""Structured logging setup.

Components obtain loggers with ``structlog.get_logger(__name__)`` (or accept
one through their constructor) and never configure logging themselves.
Applications call ``configure_logging()`` once at startup.
"""

import logging
import sys

import structlog

from layered_repository.config import get_settings


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Route structlog through the standard library logging module.

    Args:
        level: Minimum log level name (e.g. "DEBUG", "INFO"). Defaults to LOG_LEVEL.
        json_output: Render events as JSON lines instead of console output.
            Defaults to LOG_JSON.
    """
    if level is None or json_output is None:
        settings = get_settings()
        level = level or settings.log_level
        json_output = settings.log_json if json_output is None else json_output

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
