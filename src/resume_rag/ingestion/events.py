"""Structured progress events emitted by the ingestion pipeline.

The pipeline never prints; it emits :class:`IngestionEvent` objects to an
:class:`EventSink`.  The console is just one sink among others.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Literal, Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

EventKind = Literal["stage_started", "stage_completed", "chunk_progress", "error"]


class IngestionEvent(BaseModel):
    """One observation about a pipeline run.

    Attributes
    ----------
    kind:
        What happened.
    stage:
        Pipeline stage the event belongs to.
    index / total:
        1-based chunk position and chunk count (``chunk_progress`` only).
    count:
        Rows in the collection after the insert, ``None`` when unknown.
    detail:
        Free-form summary, e.g. ``"Split into 8 chunks"``.
    preview:
        First characters of the chunk being processed.
    error / category:
        Message and error category (``error`` only).
    """

    kind: EventKind
    stage: str
    index: int | None = None
    total: int | None = None
    count: int | None = None
    detail: str = ""
    preview: str = ""
    error: str = ""
    category: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def percent(self) -> int | None:
        if self.index is None or not self.total:
            return None
        return round(self.index / self.total * 100)


class EventSink(Protocol):
    """Anything that can receive pipeline events."""

    def emit(self, event: IngestionEvent) -> None: ...


class LoggingEventSink:
    """Console sink rendering events through :mod:`logging`."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def emit(self, event: IngestionEvent) -> None:
        if event.kind == "stage_started":
            self._log.info("[%s] %s...", event.stage, event.detail)
        elif event.kind == "stage_completed":
            self._log.info("[%s] ✓ %s", event.stage, event.detail)
        elif event.kind == "chunk_progress":
            self._log.info(
                "Chunk %d/%d (%d%%) stored: %r; documents in collection: %s",
                event.index,
                event.total,
                event.percent,
                event.preview,
                "unknown" if event.count is None else event.count,
            )
        else:
            self._log.error("[%s] ✗ failed (%s): %s", event.stage, event.category, event.error)


class CollectingEventSink:
    """In-memory sink; keeps every event for later inspection."""

    def __init__(self) -> None:
        self.events: list[IngestionEvent] = []

    def emit(self, event: IngestionEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: EventKind) -> list[IngestionEvent]:
        return [e for e in self.events if e.kind == kind]


class MultiEventSink:
    """Fan out every event to several sinks, in order."""

    def __init__(self, *sinks: EventSink) -> None:
        self._sinks = sinks

    def emit(self, event: IngestionEvent) -> None:
        for sink in self._sinks:
            sink.emit(event)
