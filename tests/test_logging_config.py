"""Tests for logging configuration and formatters."""

import json
import logging
import sys

import pytest

from jobdesc.logging import ComponentLoggerAdapter, get_logger
from jobdesc.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from jobdesc.logging.context import log_context


@pytest.fixture
def logger():
    """Create a test logger with handler for capturing output."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


@pytest.fixture
def key_value_formatter():
    return KeyValueFormatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["timestamp"].endswith("Z")


def test_json_formatter_with_extra_fields(logger):
    """Test JSONFormatter includes extra fields."""
    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Document formatted",
        (),
        None,
        extra={"event": "maintenance.document.completed", "length_after": 42, "persisted": True},
    )

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "maintenance.document.completed"
    assert log_obj["length_after"] == 42
    assert log_obj["persisted"] is True


def test_json_formatter_includes_exception(logger):
    try:
        raise ValueError("boom")
    except ValueError:
        record = logger.makeRecord(
            "test", logging.ERROR, "test.py", 1, "Failed", (), sys.exc_info()
        )

    log_obj = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in log_obj["exc_info"]


def test_contextual_filter_adds_static_fields(logger):
    """Test ContextualFilter adds static service and environment fields."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    ContextualFilter(service="test-service", environment="test").filter(record)

    assert record.service == "test-service"
    assert record.environment == "test"


def test_contextual_filter_adds_context_fields(logger):
    """Test ContextualFilter adds fields from log context."""
    with log_context(run_id="abc123", document_id="job-42"):
        record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)
        ContextualFilter().filter(record)

    assert record.run_id == "abc123"
    assert record.document_id == "job-42"


def test_contextual_filter_keeps_explicit_fields(logger):
    with log_context(document_id="job-42"):
        record = logger.makeRecord(
            "test", logging.INFO, "test.py", 1, "Test message", (), None,
            extra={"document_id": "job-7"},
        )
        ContextualFilter().filter(record)

    assert record.document_id == "job-7"


def test_json_formatter_with_context(logger):
    """Test full pipeline: context + filter + JSON formatter."""
    with log_context(run_id="abc123", operation="format"):
        record = logger.makeRecord(
            "test",
            logging.INFO,
            "test.py",
            1,
            "Maintenance run started",
            (),
            None,
            extra={"event": "maintenance.run.started"},
        )
        ContextualFilter(service="job-description-pipeline", environment="test").filter(record)
        log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["message"] == "Maintenance run started"
    assert log_obj["event"] == "maintenance.run.started"
    assert log_obj["service"] == "job-description-pipeline"
    assert log_obj["environment"] == "test"
    assert log_obj["run_id"] == "abc123"
    assert log_obj["operation"] == "format"


def test_key_value_formatter_basic(logger, key_value_formatter):
    """Test KeyValueFormatter produces readable output."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    output = key_value_formatter.format(record)

    assert "[INFO]" in output
    assert "Test message" in output


def test_key_value_formatter_with_extras(logger, key_value_formatter):
    """Test KeyValueFormatter includes extra fields as key=value pairs."""
    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Test message",
        (),
        None,
        extra={
            "event": "maintenance.run.completed",
            "updated": 3,
            "dry_run": False,
            "source_filter": None,
            "label": "Backend Engineer @ Example Corp",
        },
    )

    output = key_value_formatter.format(record)

    assert "event=maintenance.run.completed" in output
    assert "updated=3" in output
    assert "dry_run=false" in output
    assert "source_filter=null" in output
    assert 'label="Backend Engineer @ Example Corp"' in output


def test_key_value_formatter_skips_static_fields(logger, key_value_formatter):
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)
    ContextualFilter(environment="test").filter(record)

    output = key_value_formatter.format(record)

    assert "environment=" not in output
    assert "service=" not in output


class TestComponentLogger:
    """Test the component-tagging adapter."""

    def test_plain_logger_without_component(self):
        assert isinstance(get_logger("jobdesc.test"), logging.Logger)

    def test_component_merged_into_extra(self, caplog):
        logger = get_logger("jobdesc.test", component="pipeline")
        assert isinstance(logger, ComponentLoggerAdapter)

        with caplog.at_level(logging.INFO, logger="jobdesc.test"):
            logger.info("Run started", extra={"event": "maintenance.run.started"})

        record = caplog.records[-1]
        assert record.component == "pipeline"
        assert record.event == "maintenance.run.started"


class TestConfigureLogging:
    """Test root logger configuration."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_output(self, capsys):
        configure_logging(level="DEBUG", format_type="json", environment="test")

        logging.getLogger("jobdesc.test").info("Hello", extra={"event": "test.event"})

        lines = [json.loads(line) for line in capsys.readouterr().err.strip().splitlines()]
        assert lines[-1]["message"] == "Hello"
        assert lines[-1]["environment"] == "test"
        assert logging.getLogger().level == logging.DEBUG

    def test_key_value_output(self, capsys):
        configure_logging(level="info")

        logging.getLogger("jobdesc.test").warning("Careful", extra={"event": "test.event"})

        assert "[WARNING] jobdesc.test: Careful event=test.event" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "kwargs", [{"level": "LOUD"}, {"format_type": "xml"}]
    )
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            configure_logging(**kwargs)
