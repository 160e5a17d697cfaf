"""Logging configuration for the application."""

import logging
import sys
from typing import Any

import structlog


def _renderer(log_level: str) -> Any:
    if log_level == "DEBUG":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure structlog and the standard library root logger.
    Call once at application startup, before the server starts serving.
    """
    log_level = log_level.upper()

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            _renderer(log_level),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # uvicorn and httpx log through the standard library; render them the same way
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_renderer(log_level),
        foreign_pre_chain=shared_processors,
        fmt="%(message)s",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # httpx logs every request at INFO, which floods the catalog refresh output
    logging.getLogger("httpx").setLevel(max(logging.WARNING, root_logger.level))


def get_logger(name: str) -> Any:
    """Get a configured structlog logger."""
    return structlog.get_logger(name)
