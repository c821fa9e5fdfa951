"""Tests for logging configuration and formatters."""

import io
import json
import logging
import sys

import pytest

from jobboard.logging import ComponentLoggerAdapter, get_logger
from jobboard.logging.config import (
    SERVICE_NAME,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from jobboard.logging.context import log_context

KEY_VALUE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@pytest.fixture
def logger():
    """Create a test logger with handler for capturing output."""
    test_logger = logging.getLogger("jobboard.tests")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def make_record(logger, message="Test message", extra=None, level=logging.INFO):
    return logger.makeRecord("jobboard.tests", level, "test.py", 1, message, (), None, extra=extra)


# ============================================================================
# JSON formatter
# ============================================================================


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    log_obj = json.loads(JSONFormatter().format(make_record(logger)))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["logger"] == "jobboard.tests"
    assert "timestamp" in log_obj


def test_json_formatter_with_extra_fields(logger):
    """Test JSONFormatter includes extra fields."""
    record = make_record(logger, extra={"event": "retrieval.list.completed", "job_count": 12, "flag": True})
    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "retrieval.list.completed"
    assert log_obj["job_count"] == 12
    assert log_obj["flag"] is True


def test_json_formatter_stringifies_unknown_types(logger):
    record = make_record(logger, extra={"missing_fields": ["apply_url"], "table": object()})
    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["missing_fields"] == ["apply_url"]
    assert log_obj["table"].startswith("<object object")


def test_json_formatter_includes_exception(logger):
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logger.makeRecord("jobboard.tests", logging.ERROR, "test.py", 1, "Failed", (), sys.exc_info())

    log_obj = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in log_obj["exc_info"]


def test_timestamp_format_in_json(logger):
    """Test that JSON formatter produces correct ISO-8601 timestamp format."""
    timestamp = json.loads(JSONFormatter().format(make_record(logger)))["timestamp"]

    assert timestamp.endswith("Z")
    assert "T" in timestamp
    assert len(timestamp) == 24  # 2025-11-04T10:30:00.123Z


def test_json_formatter_no_duplicate_fields(logger):
    """Test that JSON formatter doesn't duplicate standard fields in extras."""
    log_obj = json.loads(JSONFormatter().format(make_record(logger, extra={"event": "test.event"})))

    assert "name" not in log_obj
    assert "levelname" not in log_obj
    assert "event" in log_obj


# ============================================================================
# Contextual filter
# ============================================================================


def test_contextual_filter_adds_static_fields(logger):
    """Test ContextualFilter adds static service and environment fields."""
    record = make_record(logger)
    ContextualFilter(service="test-service", environment="test").filter(record)

    assert record.service == "test-service"
    assert record.environment == "test"


def test_contextual_filter_default_service(logger):
    record = make_record(logger)
    ContextualFilter().filter(record)
    assert record.service == SERVICE_NAME == "job-board"


def test_contextual_filter_adds_context_fields(logger):
    """Test ContextualFilter adds fields from log context."""
    with log_context(operation="get_job", record_id="recA1b2C3"):
        record = make_record(logger)
        ContextualFilter().filter(record)

    assert record.operation == "get_job"
    assert record.record_id == "recA1b2C3"


def test_explicit_extra_wins_over_context(logger):
    with log_context(record_id="recFromContext"):
        record = make_record(logger, extra={"record_id": "recExplicit"})
        ContextualFilter().filter(record)

    assert record.record_id == "recExplicit"


def test_json_formatter_with_context(logger):
    """Test full pipeline: context + filter + JSON formatter."""
    with log_context(operation="list_active_jobs"):
        record = make_record(logger, "Listed active jobs", extra={"event": "retrieval.list.completed"})
        ContextualFilter(environment="test").filter(record)
        log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["message"] == "Listed active jobs"
    assert log_obj["event"] == "retrieval.list.completed"
    assert log_obj["service"] == "job-board"
    assert log_obj["environment"] == "test"
    assert log_obj["operation"] == "list_active_jobs"


# ============================================================================
# Key-value formatter
# ============================================================================


def test_key_value_formatter_basic(logger):
    """Test KeyValueFormatter produces readable output."""
    output = KeyValueFormatter(KEY_VALUE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S").format(make_record(logger))

    assert "[INFO]" in output
    assert "jobboard.tests: Test message" in output


def test_key_value_formatter_with_extras(logger):
    """Test KeyValueFormatter includes extra fields as sorted key=value pairs."""
    record = make_record(logger, extra={"event": "test.event", "count": 42})
    output = KeyValueFormatter(KEY_VALUE_FORMAT).format(record)

    assert output.endswith("count=42 event=test.event")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("plain", "plain"),
        ("two words", '"two words"'),
        ("a=b", '"a=b"'),
        ("", '""'),
        (True, "true"),
        (None, "null"),
        (3, "3"),
    ],
)
def test_key_value_formatter_values(logger, value, expected):
    output = KeyValueFormatter(KEY_VALUE_FORMAT).format(make_record(logger, extra={"field": value}))
    assert output.endswith(f"field={expected}")


def test_key_value_formatter_skips_static_fields(logger):
    record = make_record(logger)
    ContextualFilter(environment="test").filter(record)
    output = KeyValueFormatter(KEY_VALUE_FORMAT).format(record)

    assert "service=" not in output
    assert "environment=" not in output


# ============================================================================
# configure_logging
# ============================================================================


def test_configure_logging_invalid_level():
    """Test configure_logging rejects invalid log level."""
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="INVALID")


def test_configure_logging_invalid_format():
    """Test configure_logging rejects invalid format type."""
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="invalid")


def test_configure_logging_json_format(restore_root_logger):
    """Test configure_logging with JSON format."""
    configure_logging(level="debug", format_type="json", environment="test")

    handler = restore_root_logger.handlers[0]
    assert isinstance(handler.formatter, JSONFormatter)
    assert restore_root_logger.level == logging.DEBUG


def test_configure_logging_key_value_format(restore_root_logger):
    """Test configure_logging with key-value format."""
    configure_logging(level="INFO", format_type="key-value", environment="test")

    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, KeyValueFormatter)


def test_configure_logging_defaults_to_stderr(restore_root_logger):
    configure_logging()
    assert restore_root_logger.handlers[0].stream is sys.stderr


def test_configure_logging_writes_to_stream(restore_root_logger):
    stream = io.StringIO()
    configure_logging(level="INFO", format_type="json", environment="test", stream=stream)

    get_logger("jobboard.tests", component="tests").info("Hello", extra={"event": "tests.hello"})

    log_obj = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert log_obj["message"] == "Hello"
    assert log_obj["component"] == "tests"
    assert log_obj["environment"] == "test"


# ============================================================================
# Component loggers
# ============================================================================


def test_get_logger_without_component():
    assert isinstance(get_logger("jobboard.tests"), logging.Logger)


def test_get_logger_with_component_merges_extra():
    adapter = get_logger("jobboard.tests", component="store")
    assert isinstance(adapter, ComponentLoggerAdapter)

    _, kwargs = adapter.process("msg", {"extra": {"event": "store.list.completed"}})
    assert kwargs["extra"] == {"component": "store", "event": "store.list.completed"}


def test_call_extra_overrides_component():
    adapter = get_logger("jobboard.tests", component="store")
    _, kwargs = adapter.process("msg", {"extra": {"component": "override"}})
    assert kwargs["extra"]["component"] == "override"
