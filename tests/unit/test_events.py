"""Unit tests for event sinks and throttles."""

from __future__ import annotations

import logging

import pytest

from resume_rag.ingestion.events import (
    CollectingEventSink,
    IngestionEvent,
    LoggingEventSink,
    MultiEventSink,
)
from resume_rag.ingestion.throttle import FixedDelayThrottle, NoThrottle


def test_percent_rounds_progress() -> None:
    event = IngestionEvent(kind="chunk_progress", stage="embedding", index=1, total=3)
    assert event.percent == 33


def test_percent_unknown_outside_progress() -> None:
    assert IngestionEvent(kind="stage_started", stage="loaded").percent is None


def test_multi_sink_fans_out() -> None:
    a, b = CollectingEventSink(), CollectingEventSink()
    event = IngestionEvent(kind="stage_completed", stage="chunked", detail="Split into 4 chunks")
    MultiEventSink(a, b).emit(event)
    assert a.events == [event]
    assert b.events == [event]


def test_logging_sink_renders_progress(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggingEventSink(logging.getLogger("test.events"))
    with caplog.at_level(logging.INFO, logger="test.events"):
        sink.emit(
            IngestionEvent(kind="chunk_progress", stage="embedding", index=2, total=4, count=None, preview="name: Jordan")
        )
    assert "Chunk 2/4 (50%)" in caplog.text
    assert "unknown" in caplog.text


def test_logging_sink_reports_errors(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggingEventSink(logging.getLogger("test.events"))
    with caplog.at_level(logging.INFO, logger="test.events"):
        sink.emit(IngestionEvent(kind="error", stage="embedding", error="rate limited", category="embedding"))
    assert caplog.records[-1].levelno == logging.ERROR
    assert "rate limited" in caplog.text


def test_fixed_delay_uses_injected_sleep() -> None:
    sleeps: list[float] = []
    throttle = FixedDelayThrottle(0.5, sleep=sleeps.append)
    throttle.wait()
    throttle.wait()
    assert sleeps == [0.5, 0.5]


def test_zero_delay_never_sleeps() -> None:
    sleeps: list[float] = []
    FixedDelayThrottle(0, sleep=sleeps.append).wait()
    assert sleeps == []


def test_negative_delay_rejected() -> None:
    with pytest.raises(ValueError):
        FixedDelayThrottle(-1)


def test_no_throttle() -> None:
    assert NoThrottle().wait() is None
