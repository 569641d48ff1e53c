"""
Tests for the logging observer's output format.
"""
import json
import logging

from gemini_relay.services.relay import LoggingObserver


def test_logged_line_carries_event_fields(caplog):
    formatter = logging.Formatter(logging.BASIC_FORMAT)

    with caplog.at_level(logging.INFO, logger="gemini_relay.relay"):
        LoggingObserver().emit("chat_request.validated", turn_count=3, model="gemini-2.0-flash")

    record = caplog.records[-1]
    line = formatter.format(record)
    assert line.startswith("INFO:gemini_relay.relay:")
    assert '"turn_count": 3' in line
    assert '"model": "gemini-2.0-flash"' in line
    assert json.loads(record.getMessage()) == {
        "event": "chat_request.validated",
        "turn_count": 3,
        "model": "gemini-2.0-flash",
    }


def test_failure_events_are_warnings(caplog):
    with caplog.at_level(logging.INFO, logger="gemini_relay.relay"):
        LoggingObserver().emit("chat_reply.degraded", code="missing_credential")

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert "missing_credential" in record.getMessage()
