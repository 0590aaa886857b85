"""
Test suite for events.sql_events module.

Tests cover:
- SQLEvent defaults and failed flag
- log_sql_event output for successful and failed statements
- install_sql_logger on explicit and default registries
"""

import logging
from unittest.mock import patch

import pytest

from events.registry import EventRegistry
from events.sql_events import SQLEvent, install_sql_logger, log_sql_event


@pytest.mark.unit
def test_sql_event_defaults():
    event = SQLEvent(query="SELECT 1")

    assert event.args == []
    assert event.result is None
    assert event.error is None
    assert not event.failed


@pytest.mark.unit
def test_sql_event_failed_when_error_set():
    assert SQLEvent(query="SELECT", error=RuntimeError("boom")).failed


@pytest.mark.unit
def test_log_sql_event_logs_statement_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="events.sql_events"):
        result = log_sql_event(SQLEvent(query="DELETE FROM t WHERE id = ?", args=[3]))

    assert result is None
    assert "[SQL]: DELETE FROM t WHERE id = ? , args: [3]" in caplog.text
    assert caplog.records[-1].levelno == logging.DEBUG


@pytest.mark.unit
def test_log_sql_event_logs_failures_at_error(caplog):
    with caplog.at_level(logging.DEBUG, logger="events.sql_events"):
        log_sql_event(SQLEvent(query="SELECT x", error=RuntimeError("no such column")))

    assert caplog.records[-1].levelno == logging.ERROR
    assert "no such column" in caplog.text


@pytest.mark.integration
def test_install_sql_logger_on_explicit_registry(caplog):
    bus = EventRegistry()

    assert install_sql_logger(bus) is bus
    with caplog.at_level(logging.DEBUG, logger="events.sql_events"):
        results = bus.notify_all(SQLEvent(query="SELECT 1"))

    assert results == (None,)
    assert "[SQL]: SELECT 1" in caplog.text


@pytest.mark.unit
def test_install_sql_logger_defaults_to_process_registry():
    fake_default = EventRegistry()

    with patch("events.sql_events.default_registry", fake_default):
        assert install_sql_logger() is fake_default

    assert fake_default.handlers(SQLEvent) == (log_sql_event,)
