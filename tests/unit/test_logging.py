"""Unit tests for the logging configuration module."""

import logging
from unittest.mock import patch

import pytest
import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper

from xsen_mcp.utils.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging():
    """Fixture to reset logging configuration before and after each test."""
    original_handlers = list(logging.root.handlers)
    original_level = logging.root.level
    original_structlog_config = structlog.get_config()

    yield

    logging.root.handlers[:] = original_handlers
    logging.root.setLevel(original_level)
    structlog.configure(**original_structlog_config)


def test_configure_logging_info_level():
    """Test that logging is configured with JSONRenderer for INFO level."""
    with patch("structlog.configure") as mock_structlog_configure:
        configure_logging(log_level="INFO")

        assert logging.getLevelName(logging.getLogger().level) == "INFO"
        mock_structlog_configure.assert_called_once()

        _, kwargs = mock_structlog_configure.call_args
        processors = kwargs.get("processors", [])
        assert any(isinstance(p, JSONRenderer) for p in processors)
        assert not any(isinstance(p, ConsoleRenderer) for p in processors)
        assert any(isinstance(p, TimeStamper) for p in processors)


def test_configure_logging_debug_level():
    """Test that logging is configured with ConsoleRenderer for DEBUG level."""
    with patch("structlog.configure") as mock_structlog_configure:
        configure_logging(log_level="debug")

        assert logging.getLevelName(logging.getLogger().level) == "DEBUG"

        _, kwargs = mock_structlog_configure.call_args
        processors = kwargs.get("processors", [])
        assert any(isinstance(p, ConsoleRenderer) for p in processors)
        assert not any(isinstance(p, JSONRenderer) for p in processors)


def test_configure_logging_quiets_httpx():
    with patch("structlog.configure"):
        configure_logging(log_level="DEBUG")
    assert logging.getLogger("httpx").level == logging.WARNING


def test_get_logger_returns_logger():
    """Test that get_logger returns a valid logger instance."""
    configure_logging()
    logger = get_logger("test_logger")
    assert isinstance(logger.bind(), structlog.stdlib.BoundLogger)
