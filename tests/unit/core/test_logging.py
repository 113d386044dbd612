"""Unit tests for the logging module.

This module tests the logging functionality including:
- JSON formatting
- Context logging
- Performance tracking
"""

import asyncio
import json
import logging
from unittest.mock import patch

import pytest

from folio.core.logging import ContextLogger, JSONFormatter, setup_logging


def test_json_formatter():
    """Test JSON formatter correctly formats log records."""
    formatter = JSONFormatter()

    record = logging.LogRecord(
        name="test_logger",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="Test message",
        args=(),
        exc_info=None,
    )

    log_dict = json.loads(formatter.format(record))

    assert log_dict["level"] == "INFO"
    assert log_dict["logger"] == "test_logger"
    assert log_dict["message"] == "Test message"
    assert log_dict["module"] == "test"
    assert log_dict["line"] == 1
    assert "timestamp" in log_dict


def test_json_formatter_with_exception():
    """Test JSON formatter correctly formats exception information."""
    formatter = JSONFormatter()

    try:
        raise ValueError("Test error")
    except ValueError as e:
        record = logging.LogRecord(
            name="test_logger",
            level=logging.ERROR,
            pathname="test.py",
            lineno=1,
            msg="Error occurred",
            args=(),
            exc_info=(ValueError, e, e.__traceback__),
        )

    log_dict = json.loads(formatter.format(record))

    assert log_dict["level"] == "ERROR"
    assert log_dict["exception"]["type"] == "ValueError"
    assert log_dict["exception"]["message"] == "Test error"


def test_json_formatter_includes_profile_fields():
    formatter = JSONFormatter()
    record = logging.LogRecord(
        name="test_logger",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="Loading feed page",
        args=(),
        exc_info=None,
    )
    record.profile_id = 42
    record.page = 3

    log_dict = json.loads(formatter.format(record))

    assert log_dict["profile_id"] == 42
    assert log_dict["page"] == 3
    assert "state" not in log_dict


def test_json_formatter_includes_timing_and_error_fields():
    formatter = JSONFormatter()
    record = logging.LogRecord(
        name="test_logger",
        level=logging.WARNING,
        pathname="test.py",
        lineno=1,
        msg="Remote call failed",
        args=(),
        exc_info=None,
    )
    record.duration_ms = 12.5
    record.error_code = "NetworkError"
    record.details = {"status_code": 503}

    log_dict = json.loads(formatter.format(record))

    assert log_dict["duration_ms"] == 12.5
    assert log_dict["error_code"] == "NetworkError"
    assert log_dict["details"] == {"status_code": 503}


@pytest.mark.asyncio
async def test_context_logger_track_time():
    """Test time tracking context manager."""
    logger = ContextLogger("test.logger")

    with patch.object(logger, "debug") as mock_debug:
        async with logger.track_time("GET /users/42"):
            await asyncio.sleep(0.001)

        mock_debug.assert_called_once()
        args, kwargs = mock_debug.call_args
        assert args[0] == "GET /users/42 completed"
        assert kwargs["extra"]["duration_ms"] > 0


def test_logging_passes_extra_fields():
    logger = ContextLogger("test.logger")

    with patch.object(logger.logger, "log") as mock_log:
        logger.info("Test message", extra={"profile_id": 42})

        args, kwargs = mock_log.call_args
        assert args[0] == logging.INFO
        assert args[1] == "Test message"
        assert kwargs["extra"]["profile_id"] == 42


def test_setup_logging(tmp_path):
    """Test logging setup writes JSON lines to the log directory."""
    root_logger = logging.getLogger()
    saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
    try:
        setup_logging(log_dir=str(tmp_path / "logs"), debug=True)

        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 2

        logging.getLogger("folio.test").info("Test log message")
        for handler in root_logger.handlers:
            handler.flush()

        (log_file,) = (tmp_path / "logs").glob("folio-*.log")
        line = json.loads(log_file.read_text().splitlines()[-1])
        assert line["message"] == "Test log message"
    finally:
        for handler in root_logger.handlers:
            handler.close()
        root_logger.handlers[:] = saved_handlers
        root_logger.setLevel(saved_level)
