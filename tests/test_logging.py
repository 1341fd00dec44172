"""
Tests for logging setup, formatters and the logging observer.
"""

import json
import logging
import time

import pytest

from storex_graphql_client import (
    LoggingConfig,
    LoggingObserver,
    LogLevel,
    MethodCallStarted,
    RequestCompiled,
)
from storex_graphql_client.logging import (
    PACKAGE_LOGGER,
    ConsoleFormatter,
    LoggingManager,
    StructuredFormatter,
    setup_logging,
)


def make_record(**extra):
    """Build a log record with optional extra attributes."""
    record = logging.LogRecord(
        name="storex_graphql_client.test",
        level=logging.INFO,
        pathname="/test/path.py",
        lineno=42,
        msg="Test message",
        args=(),
        exc_info=None,
    )
    record.created = time.time()
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Test structured log formatter."""

    def test_structured_format(self):
        """Records are rendered as JSON objects."""
        parsed = json.loads(StructuredFormatter().format(make_record()))

        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Test message"
        assert parsed["logger"] == "storex_graphql_client.test"
        assert "timestamp" in parsed
        assert "module" in parsed

    def test_structured_format_with_extra(self):
        """Extra attributes become JSON keys."""
        record = make_record(event="request-prepared", event_fields={"query": "{ hello }"})
        parsed = json.loads(StructuredFormatter().format(record))

        assert parsed["event"] == "request-prepared"
        assert parsed["event_fields"] == {"query": "{ hello }"}
        assert "msg" not in parsed


class TestConsoleFormatter:
    """Test the plain console formatter."""

    def test_colors_disabled(self):
        """Without colors the output is plain."""
        formatter = ConsoleFormatter("%(levelname)s %(message)s")
        assert formatter.format(make_record()) == "INFO Test message"

    def test_colors_enabled(self):
        """The whole line is tinted with the level color."""
        formatter = ConsoleFormatter("%(levelname)s %(message)s", use_colors=True)
        assert formatter.format(make_record()) == "\033[32mINFO Test message\033[0m"

    def test_setup_without_structured_output(self):
        """Plain output uses the console formatter with explicit color choice."""
        manager = setup_logging(LoggingConfig(use_colors=False))
        try:
            formatters = [h.formatter for h in logging.getLogger(PACKAGE_LOGGER).handlers]
            console = [f for f in formatters if isinstance(f, ConsoleFormatter)]
            assert console and not console[0].use_colors
        finally:
            manager.cleanup()


class TestLoggingManager:
    """Test package logging setup."""

    @pytest.fixture
    def manager(self):
        """Manager that is cleaned up after the test."""
        manager = LoggingManager()
        yield manager
        manager.cleanup()

    def test_setup_adds_package_handler(self, manager):
        """One handler is installed on the package logger, not the root logger."""
        root_handlers = list(logging.getLogger().handlers)
        manager.setup_logging(LoggingConfig(level=LogLevel.DEBUG, enable_structured=True))

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert manager.is_configured()
        assert package_logger.level == logging.DEBUG
        assert any(isinstance(h.formatter, StructuredFormatter) for h in package_logger.handlers)
        assert logging.getLogger().handlers == root_handlers

    def test_setup_twice_replaces_handler(self, manager):
        """Reconfiguring does not stack handlers."""
        manager.setup_logging(LoggingConfig())
        count = len(logging.getLogger(PACKAGE_LOGGER).handlers)
        manager.setup_logging(LoggingConfig())
        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == count

    def test_component_levels(self, manager):
        """Component loggers get their own levels."""
        manager.setup_logging(
            LoggingConfig(component_levels={"storex_graphql_client.transport": LogLevel.ERROR})
        )
        assert logging.getLogger("storex_graphql_client.transport").level == logging.ERROR
        logging.getLogger("storex_graphql_client.transport").setLevel(logging.NOTSET)

    def test_cleanup(self, manager):
        """Cleanup removes the installed handlers."""
        before = len(logging.getLogger(PACKAGE_LOGGER).handlers)
        manager.setup_logging(LoggingConfig())
        manager.cleanup()
        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == before
        assert not manager.is_configured()

    def test_setup_logging_helper(self):
        """The helper returns the manager owning the handlers."""
        manager = setup_logging(LoggingConfig(level=LogLevel.INFO))
        try:
            assert manager.is_configured()
            assert logging.getLogger(PACKAGE_LOGGER).level == logging.INFO
        finally:
            manager.cleanup()


class TestLoggingObserver:
    """Test the logging observer."""

    def test_logs_events(self, caplog):
        """Each event becomes one record with its fields attached."""
        observer = LoggingObserver()

        with caplog.at_level(logging.DEBUG, logger="storex_graphql_client.calls"):
            observer(MethodCallStarted(module="test", method="testMethod", args=({"name": "John"},)))
            observer(RequestCompiled(query="{ hello }", variables={}, body="{}"))

        assert [record.event for record in caplog.records] == ["preparing-request", "request-prepared"]
        assert caplog.records[0].event_fields["module"] == "test"
        assert "type" not in caplog.records[1].event_fields
        assert "query='{ hello }'" in caplog.records[1].getMessage()

    def test_disabled_level(self, caplog):
        """Nothing is logged when the level is disabled."""
        observer = LoggingObserver(level=logging.DEBUG)

        with caplog.at_level(logging.INFO, logger="storex_graphql_client.calls"):
            observer(MethodCallStarted(module="test", method="testMethod"))

        assert caplog.records == []
