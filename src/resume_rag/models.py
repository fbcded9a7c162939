"""Domain models shared by ingestion, storage, and serving."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field

RESUME_SOURCE = "resume"


class DocumentMetadata(BaseModel):
    """Provenance attached to every document and chunk.

    Attributes
    ----------
    source:
        Always the literal tag ``"resume"``.
    section:
        The JSON pointer path the text was extracted from (e.g. ``"/skills"``).
    """

    source: Literal["resume"] = RESUME_SOURCE
    section: str


class ResumeDocument(BaseModel):
    """One résumé section flattened to human-readable text."""

    text: str
    metadata: DocumentMetadata


class Chunk(BaseModel):
    """A bounded slice of a :class:`ResumeDocument`.

    ``index`` is the chunk's position within its parent document and
    ``start_index`` the character offset of ``text`` in the parent text.
    Neither is part of the stored metadata.
    """

    text: str
    metadata: DocumentMetadata
    index: int = 0
    start_index: int = 0

    @property
    def end_index(self) -> int:
        return self.start_index + len(self.text)

    def preview(self, width: int = 50) -> str:
        return self.text[:width]


class EmbeddingRecord(BaseModel):
    """A chunk persisted together with its embedding vector."""

    id: str
    chunk: Chunk
    vector: list[float]
    stored_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SearchHit(BaseModel):
    """A single similarity-search match."""

    id: str
    content: str
    score: float
    metadata: dict[str, Any] = Field(default_factory=dict)
