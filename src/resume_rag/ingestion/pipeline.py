"""Ingestion orchestrator: reset, load, normalise, chunk, embed-and-store.

Stages run strictly in sequence and each must finish before the next
starts::

    INIT → CACHE_CLEARED → COLLECTION_CLEARED → LOADED → NORMALIZED
         → CHUNKED → EMBEDDING(1..n) → DONE

Any error moves the run to ``FAILED``: an ``error`` event is emitted and
the original exception propagates unchanged.  Chunks stored before the
failure stay stored; re-running is safe because every run starts by
clearing the collection.

Usage::

    from resume_rag.config import Settings
    from resume_rag.ingestion.pipeline import IngestionPipeline

    report = IngestionPipeline.from_settings(Settings()).run()
    print(report.inserted, report.final_count)
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from resume_rag.config import DEFAULT_SECTIONS, Settings
from resume_rag.ingestion.chunker import build_splitter, chunk_documents
from resume_rag.ingestion.events import EventSink, IngestionEvent, LoggingEventSink
from resume_rag.ingestion.loader import check_sections, load_resume, normalize_sections
from resume_rag.ingestion.throttle import FixedDelayThrottle, Throttle
from resume_rag.models import Chunk, ResumeDocument
from resume_rag.store.base import StoreGateway

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    """Stage the run is currently in; its work is done once ``stage_completed`` fires."""

    INIT = "init"
    CACHE_CLEARED = "cache_cleared"
    COLLECTION_CLEARED = "collection_cleared"
    LOADED = "loaded"
    NORMALIZED = "normalized"
    CHUNKED = "chunked"
    EMBEDDING = "embedding"
    DONE = "done"
    FAILED = "failed"


class IngestionReport(BaseModel):
    """Summary of a completed run."""

    documents: int
    chunks: int
    inserted: int
    final_count: int | None
    elapsed_seconds: float


class IngestionPipeline:
    """Drive one batch ingestion of the résumé into the store.

    Parameters
    ----------
    gateway:
        Store gateway; its handles are reused for the whole run.
    resume_path:
        Path to the résumé JSON file.
    sections:
        Ordered JSON pointer paths to extract.
    chunk_size / chunk_overlap:
        Chunking parameters, validated at construction time.
    sink:
        Receiver of progress events (console logging by default).
    throttle:
        Pacing between chunks (one-second pause by default).
    """

    def __init__(
        self,
        gateway: StoreGateway,
        *,
        resume_path: str | Path,
        sections: list[str] | None = None,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        sink: EventSink | None = None,
        throttle: Throttle | None = None,
    ) -> None:
        self._gateway = gateway
        self._resume_path = Path(resume_path)
        self._sections = list(sections) if sections is not None else list(DEFAULT_SECTIONS)
        self._splitter = build_splitter(chunk_size, chunk_overlap)
        self._sink = sink or LoggingEventSink()
        self._throttle = throttle or FixedDelayThrottle(1.0)
        self.stage = Stage.INIT

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        gateway: StoreGateway | None = None,
        sink: EventSink | None = None,
        throttle: Throttle | None = None,
    ) -> IngestionPipeline:
        """Validate *settings* and build the pipeline with its store handles."""
        settings.check_ingestion()
        build_splitter(settings.chunk_size, settings.chunk_overlap)
        if gateway is None:
            from resume_rag.store.clients import build_gateway

            gateway = build_gateway(settings)
        return cls(
            gateway,
            resume_path=settings.resume_path,
            sections=settings.resume_sections,
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
            sink=sink,
            throttle=throttle or FixedDelayThrottle(settings.embed_delay_seconds),
        )

    # -- public API -----------------------------------------------------------

    def run(self) -> IngestionReport:
        """Execute every stage in order and return a run summary.

        Raises
        ------
        IngestionError
            Any categorised failure, re-raised as-is after an ``error`` event.
        """
        t0 = time.monotonic()
        try:
            data = self._preflight()

            self._enter(Stage.CACHE_CLEARED, "Clearing cache")
            self._gateway.reset_cache()
            self._complete("Cache cleared")

            self._enter(Stage.COLLECTION_CLEARED, "Clearing existing documents")
            self._gateway.reset_collection()
            self._complete("Existing documents cleared")

            self._enter(Stage.LOADED, f"Loading résumé from {self._resume_path}")
            self._complete(f"Résumé loaded with {len(self._sections)} sections")

            documents = self._normalize(data)
            chunks = self._chunk(documents)
            inserted = self._embed_all(chunks)

            self.stage = Stage.DONE
            final_count = self._gateway.count()
        except Exception as exc:
            self._fail(exc)
            raise

        report = IngestionReport(
            documents=len(documents),
            chunks=len(chunks),
            inserted=inserted,
            final_count=final_count,
            elapsed_seconds=round(time.monotonic() - t0, 2),
        )
        logger.info("Ingestion completed: %s", report.model_dump())
        return report

    # -- stages ---------------------------------------------------------------

    def _preflight(self) -> Any:
        # Read once, before the resets, so input problems abort before any mutation.
        data = load_resume(self._resume_path)
        check_sections(data, self._sections)
        return data

    def _normalize(self, data: Any) -> list[ResumeDocument]:
        self._enter(Stage.NORMALIZED, "Processing documents")
        documents = normalize_sections(data, self._sections)
        self._complete(f"Processed {len(documents)} documents")
        return documents

    def _chunk(self, documents: list[ResumeDocument]) -> list[Chunk]:
        self._enter(Stage.CHUNKED, "Splitting documents into chunks")
        chunks = chunk_documents(documents, self._splitter)
        self._complete(f"Split into {len(chunks)} chunks")
        return chunks

    def _embed_all(self, chunks: list[Chunk]) -> int:
        self._enter(Stage.EMBEDDING, "Generating and storing embeddings")
        total = len(chunks)
        for i, chunk in enumerate(chunks, 1):
            self._gateway.insert_chunk(chunk)
            self._emit(
                "chunk_progress",
                index=i,
                total=total,
                count=self._gateway.count(),
                preview=chunk.preview(),
            )
            if i < total:
                self._throttle.wait()
        self._complete(f"Stored {total} chunks")
        return total

    # -- events ---------------------------------------------------------------

    def _emit(self, kind: str, **fields: Any) -> None:
        self._sink.emit(IngestionEvent(kind=kind, stage=self.stage.value, **fields))

    def _enter(self, stage: Stage, detail: str) -> None:
        self.stage = stage
        self._emit("stage_started", detail=detail)

    def _complete(self, detail: str) -> None:
        self._emit("stage_completed", detail=detail)

    def _fail(self, exc: BaseException) -> None:
        failed_at = self.stage
        self.stage = Stage.FAILED
        category = getattr(exc, "category", type(exc).__name__)
        self._sink.emit(
            IngestionEvent(kind="error", stage=failed_at.value, error=str(exc), category=category)
        )


def plan_chunks(
    resume_path: str | Path,
    sections: list[str] | None = None,
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
) -> list[Chunk]:
    """Load, normalise, and chunk the résumé without touching any store."""
    splitter = build_splitter(chunk_size, chunk_overlap)
    data = load_resume(resume_path)
    documents = normalize_sections(data, list(sections) if sections is not None else list(DEFAULT_SECTIONS))
    return chunk_documents(documents, splitter)
