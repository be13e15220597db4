"""
Tests for namestore.core.logging module.

Tests verify:
- configure_logging builds the JSON / console processor chain
- ECS field renames and service metadata
- Context binding helpers
- Store events emitted at debug level
- Library loggers stay quiet until logging is configured
"""

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from namestore.core import logging as ns_logging
from namestore.core.errors import ReadOnlyViolationError
from namestore.core.logging import (
    LibraryLogger,
    LogContext,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    unbind_context,
)
from namestore.core.settings import NameStoreSettings
from namestore.core.store import NameValueStore


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()
    ns_logging._SERVICE_NAME = "namestore"


def _processor_types() -> list[type]:
    return [type(p) for p in structlog.get_config()["processors"]]


class TestConfigureLogging:
    """Test configure_logging."""

    def test_json_renderer(self):
        configure_logging(level="DEBUG", json_format=True, service="props")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert ns_logging._elasticsearch_compatible in processors
        assert ns_logging._SERVICE_NAME == "props"

    def test_console_renderer(self):
        configure_logging(level="INFO", json_format=False)
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert ns_logging._elasticsearch_compatible not in processors

    def test_timestamp_optional(self):
        configure_logging(json_format=True, add_timestamp=False)
        assert structlog.processors.TimeStamper not in _processor_types()

    def test_timestamp_default(self):
        configure_logging(json_format=True)
        assert structlog.processors.TimeStamper in _processor_types()

    def test_configure_from_settings(self):
        configure_from_settings(NameStoreSettings(log_level="WARNING", log_json=True))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)


class TestProcessors:
    """Test custom processors."""

    def test_service_metadata(self):
        ns_logging._SERVICE_NAME = "props"
        event = ns_logging._add_service_metadata(None, "info", {"event": "x"})
        assert event["service.name"] == "props"

    def test_service_metadata_does_not_override(self):
        event = ns_logging._add_service_metadata(None, "info", {"service.name": "mine"})
        assert event["service.name"] == "mine"

    def test_elasticsearch_compatible(self):
        event = ns_logging._elasticsearch_compatible(
            None, "info", {"timestamp": "2026-01-01T00:00:00Z", "level": "info", "event": "x"}
        )
        assert event == {
            "@timestamp": "2026-01-01T00:00:00Z",
            "log.level": "info",
            "event": "x",
        }


class TestContextBinding:
    """Test context helpers."""

    def test_bind_and_unbind(self):
        bind_context(owner="props", request_id="r1")
        assert structlog.contextvars.get_contextvars() == {"owner": "props", "request_id": "r1"}
        unbind_context("request_id")
        assert structlog.contextvars.get_contextvars() == {"owner": "props"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_log_context_manager(self):
        with LogContext(owner="schema-groups"):
            assert structlog.contextvars.get_contextvars()["owner"] == "schema-groups"
        assert "owner" not in structlog.contextvars.get_contextvars()

    def test_get_logger(self):
        logger = get_logger("namestore.test")
        assert isinstance(logger, LibraryLogger)
        assert hasattr(logger, "debug")
        assert repr(logger) == "LibraryLogger('namestore.test')"


class TestStoreEvents:
    """Test debug events emitted by NameValueStore."""

    def test_clear_event(self, duplicate_store):
        with capture_logs() as logs:
            duplicate_store.clear()
        assert logs == [
            {"event": "store_cleared", "removed": 5, "version": duplicate_store.version,
             "logger": "namestore.core.store", "log_level": "debug"}
        ]

    def test_remove_event_reports_count(self, duplicate_store):
        with capture_logs() as logs:
            duplicate_store.remove("a")
        assert logs[0]["event"] == "keys_removed"
        assert logs[0]["removed"] == 2
        assert logs[0]["key"] == "a"

    def test_reset_event(self, store):
        with capture_logs() as logs:
            store.reset(capacity=4)
        assert logs[0]["event"] == "store_reset"
        assert logs[0]["capacity"] == 4

    def test_read_only_transition_logged_once(self, store):
        with capture_logs() as logs:
            store.set_read_only(True)
            store.set_read_only(True)
        assert [entry["event"] for entry in logs] == ["read_only_changed"]
        assert logs[0]["read_only"] is True

    def test_rejected_mutation_logged(self, store):
        store.set_read_only(True)
        with capture_logs() as logs:
            with pytest.raises(ReadOnlyViolationError):
                store.add("k", 1)
        assert logs[0]["event"] == "mutation_rejected"
        assert logs[0]["operation"] == "add"

    def test_add_is_silent(self, store):
        with capture_logs() as logs:
            store.add("k", 1)
            store.get("k")
        assert logs == []


class TestUnconfiguredLogging:
    """Test that the library is quiet until the host configures logging."""

    def test_store_prints_nothing(self, capsys):
        assert not structlog.is_configured()
        store = NameValueStore()
        store.add("a", 1)
        store.remove("a")
        store.clear()
        store.reset(capacity=2)
        store.set_read_only(True)
        with pytest.raises(ReadOnlyViolationError):
            store.add("b", 2)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_events_reach_stdlib_when_enabled(self, caplog):
        caplog.set_level(logging.DEBUG, logger="namestore")
        store = NameValueStore()
        store.add("a", 1)
        store.clear()

        records = [r for r in caplog.records if r.getMessage() == "store_cleared"]
        assert len(records) == 1
        assert records[0].name == "namestore.core.store"
        assert records[0].levelno == logging.DEBUG
        assert records[0].removed == 1

    def test_stdlib_default_level_drops_debug(self, caplog):
        caplog.set_level(logging.WARNING, logger="namestore")
        NameValueStore().clear()
        assert caplog.records == []

    def test_configure_logging_sets_namestore_level(self):
        configure_logging(level="DEBUG", json_format=True)
        assert logging.getLogger("namestore").level == logging.DEBUG

    def test_configured_store_prints_json(self, capsys):
        store = NameValueStore()
        configure_logging(level="DEBUG", json_format=True, add_timestamp=False)
        store.clear()

        line = capsys.readouterr().out.strip()
        event = json.loads(line)
        assert event["event"] == "store_cleared"
        assert event["removed"] == 0
        assert event["log.level"] == "debug"
        assert event["logger"] == "namestore.core.store"

    def test_configured_level_filters_debug(self, capsys):
        configure_logging(level="INFO", json_format=True)
        NameValueStore().clear()
        assert capsys.readouterr().out == ""
