"""Tests for event sinks."""

import logging

import pytest

from draw_it_mcp.events import LoggingEventSink, RecordingEventSink


def test_recording_sink_keeps_events() -> None:
    sink = RecordingEventSink()

    sink.log_event(logging.DEBUG, "probe", path="/a")
    sink.log_event(logging.WARNING, "fallback")

    assert sink.messages() == ["probe", "fallback"]
    assert sink.messages(logging.WARNING) == ["fallback"]
    assert sink.events[0].fields == {"path": "/a"}


def test_logging_sink_forwards_to_logger(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="draw_it_mcp.test_events"):
        LoggingEventSink("draw_it_mcp.test_events").log_event(
            logging.INFO, "Found drawings directory", path="/tmp/drawings", name="clash"
        )

    record = caplog.records[-1]
    assert record.getMessage() == "Found drawings directory"
    assert record.levelno == logging.INFO
    assert record.path == "/tmp/drawings"
    assert record.field_name == "clash"
    assert record.name == "draw_it_mcp.test_events"


def test_logging_sink_attaches_exception(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggingEventSink(logging.getLogger("draw_it_mcp.test_events"))

    with caplog.at_level(logging.ERROR, logger="draw_it_mcp.test_events"):
        try:
            raise ValueError("bad pixels")
        except ValueError:
            sink.log_event(logging.ERROR, "get_drawing_png failed", exc_info=True)

    assert caplog.records[-1].exc_info is not None
    assert caplog.records[-1].exc_info[0] is ValueError
