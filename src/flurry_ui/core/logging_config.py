"""
Structured Logging Configuration

Compiler loggers are structlog loggers routed through the standard
``logging`` module under the ``flurry_ui`` namespace. Until the host
configures handlers (with ``configure_logging`` or its own setup), events
are filtered by level and then discarded, never printed.
"""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger.json import JsonFormatter

from .config import get_settings

LIBRARY_LOGGER = "flurry_ui"


def _processors(renderer: Any) -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def install_library_defaults() -> None:
    """
    Route structlog through stdlib logging without emitting anything.

    Leaves structlog alone when the host application configured it first.
    """
    logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())

    if structlog.is_configured():
        return

    structlog.configure(
        processors=_processors(structlog.processors.KeyValueRenderer(key_order=["event"])),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Later configure_logging calls must reach module-level loggers
        cache_logger_on_first_use=False,
    )


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Configure structured logging output for an application using the compiler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); defaults to
            the ``log_level`` setting
        json_logs: Use JSON formatter for machine-readable logs; defaults to
            the ``json_logs`` setting
    """
    settings = get_settings()
    if level is None:
        level = settings.log_level
    if json_logs is None:
        json_logs = settings.json_logs

    log_level = getattr(logging, level.upper(), logging.INFO)

    # Configure standard logging
    if json_logs:
        handler = logging.StreamHandler(sys.stdout)
        formatter = JsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
        handler.setFormatter(formatter)
        logging.basicConfig(level=log_level, handlers=[handler])
    else:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            stream=sys.stdout,
        )
    logging.getLogger(LIBRARY_LOGGER).setLevel(log_level)

    # Configure structlog
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=_processors(renderer),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


# Context manager for log context
class LogContext:
    """Add context to all log messages in scope."""

    def __init__(self, **kwargs: Any):
        self.context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())


install_library_defaults()
