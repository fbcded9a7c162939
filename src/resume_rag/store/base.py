"""Abstract base class for the store gateway.

The gateway hides the persistent vector collection and the transient
cache behind a handful of operations so the pipeline never touches an
SDK directly.  Adding a backend only requires subclassing
:class:`StoreGateway`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from resume_rag.models import Chunk, EmbeddingRecord, SearchHit


class StoreGateway(ABC):
    """Backend-agnostic access to the vector collection and cache.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / table.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- ingestion ------------------------------------------------------------

    @abstractmethod
    def reset_cache(self) -> None:
        """Flush the whole transient cache.  Idempotent.

        Raises :class:`~resume_rag.errors.StoreError` on failure.
        """
        ...

    @abstractmethod
    def reset_collection(self) -> None:
        """Delete every row of the collection unconditionally.

        Raises :class:`~resume_rag.errors.StoreError` on failure.
        """
        ...

    @abstractmethod
    def insert_chunk(self, chunk: Chunk) -> EmbeddingRecord:
        """Embed *chunk* and append one row for it.  No retry.

        Raises :class:`~resume_rag.errors.EmbeddingError` when the
        embedding call fails (nothing is written) and
        :class:`~resume_rag.errors.StoreError` when the write fails.
        """
        ...

    @abstractmethod
    def count(self) -> int | None:
        """Return the number of stored rows, or ``None`` if unknown."""
        ...

    # -- retrieval ------------------------------------------------------------

    @abstractmethod
    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[SearchHit]:
        """Return the top-*k* rows closest to *query_embedding*."""
        ...

    @abstractmethod
    def similarity_search_by_text(self, query: str, *, k: int = 5) -> list[SearchHit]:
        """Embed *query* and delegate to :meth:`similarity_search`."""
        ...

    # -- optional overrides ---------------------------------------------------

    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable.  Optional."""
        return self.count() is not None
