"""Chroma + Redis implementation of the store gateway."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from resume_rag.errors import EmbeddingError, StoreError
from resume_rag.models import Chunk, EmbeddingRecord, SearchHit
from resume_rag.store.base import StoreGateway

if TYPE_CHECKING:
    from chromadb.api.models.Collection import Collection
    from langchain_core.embeddings import Embeddings
    from redis import Redis

logger = logging.getLogger(__name__)


class ChromaStoreGateway(StoreGateway):
    """Gateway over a Chroma collection and an optional Redis cache.

    All handles are built once by the caller (see
    :func:`resume_rag.store.clients.build_gateway`) and only used here.

    Parameters
    ----------
    collection:
        Chroma collection holding ``{id, document, metadata, embedding}`` rows.
    embeddings:
        LangChain embedding model used for chunk and query vectors.
    cache:
        Redis client to flush on reset, or ``None`` when no cache is configured.
    """

    def __init__(
        self,
        collection: Collection,
        embeddings: Embeddings,
        cache: Redis | None = None,
    ) -> None:
        super().__init__(collection.name)
        self._collection = collection
        self._embeddings = embeddings
        self._cache = cache

    # -- ingestion ------------------------------------------------------------

    def reset_cache(self) -> None:
        if self._cache is None:
            logger.info("No cache configured; nothing to flush")
            return
        try:
            self._cache.flushdb()
        except Exception as exc:
            raise StoreError(f"Failed to flush cache: {exc}") from exc
        logger.info("Cache flushed")

    def reset_collection(self) -> None:
        try:
            ids = self._collection.get(include=[])["ids"]
            if ids:
                self._collection.delete(ids=ids)
        except Exception as exc:
            raise StoreError(f"Failed to clear documents: {exc}") from exc
        logger.info("Removed %d rows from collection %r", len(ids), self.collection_name)

    def insert_chunk(self, chunk: Chunk) -> EmbeddingRecord:
        try:
            vector = self._embeddings.embed_documents([chunk.text])[0]
        except Exception as exc:
            raise EmbeddingError(
                f"Embedding failed for {chunk.metadata.section} chunk {chunk.index}: {exc}"
            ) from exc

        record = EmbeddingRecord(id=uuid4().hex, chunk=chunk, vector=vector)
        try:
            self._collection.add(
                ids=[record.id],
                documents=[chunk.text],
                metadatas=[chunk.metadata.model_dump()],
                embeddings=[vector],
            )
        except Exception as exc:
            raise StoreError(f"Failed to insert chunk: {exc}") from exc
        return record

    def count(self) -> int | None:
        try:
            return self._collection.count()
        except Exception:
            logger.warning("Error checking collection row count", exc_info=True)
            return None

    # -- retrieval ------------------------------------------------------------

    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[SearchHit]:
        try:
            results: dict[str, Any] = self._collection.query(
                query_embeddings=[query_embedding],
                n_results=k,
                include=["documents", "metadatas", "distances"],
            )
        except Exception as exc:
            raise StoreError(f"Similarity search failed: {exc}") from exc

        ids = (results.get("ids") or [[]])[0]
        docs = (results.get("documents") or [[]])[0]
        metas = (results.get("metadatas") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]

        hits: list[SearchHit] = []
        for doc_id, content, meta, dist in zip(ids, docs, metas, distances):
            # Convert distance to a 0-1 similarity score.
            hits.append(
                SearchHit(
                    id=doc_id,
                    content=content or "",
                    score=1.0 / (1.0 + dist),
                    metadata=dict(meta or {}),
                )
            )
        return hits

    def similarity_search_by_text(self, query: str, *, k: int = 5) -> list[SearchHit]:
        try:
            embedding = self._embeddings.embed_query(query)
        except Exception as exc:
            raise EmbeddingError(f"Embedding failed for query: {exc}") from exc
        return self.similarity_search(embedding, k=k)
