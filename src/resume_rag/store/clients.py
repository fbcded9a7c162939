"""Construction of the external handles: embeddings, Chroma, Redis.

Each handle is built once per process and passed explicitly to the
gateway; nothing here is cached at module level.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from resume_rag.config import Settings
from resume_rag.errors import ConfigError, StoreError
from resume_rag.store.chroma_store import ChromaStoreGateway

if TYPE_CHECKING:
    from chromadb.api.models.Collection import Collection
    from langchain_core.embeddings import Embeddings
    from redis import Redis

logger = logging.getLogger(__name__)


def build_embeddings(settings: Settings) -> Embeddings:
    """Return the configured embedding model.

    ``openai`` uses ``OpenAIEmbeddings`` (routed through ``https_proxy``
    when set); ``huggingface`` runs a local sentence-transformer.
    """
    if settings.embedding_provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        logger.info("Using local HuggingFace embeddings: %s", settings.embedding_model)
        return HuggingFaceEmbeddings(model_name=settings.embedding_model)

    if not settings.openai_api_key:
        raise ConfigError("Please set OPENAI_API_KEY environment variable.")

    from langchain_openai import OpenAIEmbeddings

    kwargs: dict = {
        "model": settings.embedding_model,
        "api_key": settings.openai_api_key,
    }
    if settings.https_proxy:
        logger.info("Routing embedding requests through proxy %s", settings.https_proxy)
        kwargs["openai_proxy"] = settings.https_proxy
    return OpenAIEmbeddings(**kwargs)


def build_collection(settings: Settings) -> Collection:
    """Connect to the Chroma server and open (or create) the collection."""
    import chromadb

    headers = {"Authorization": f"Bearer {settings.chroma_token}"} if settings.chroma_token else None
    try:
        client = chromadb.HttpClient(
            host=settings.chroma_host,
            port=settings.chroma_port,
            ssl=settings.chroma_ssl,
            headers=headers,
        )
        collection = client.get_or_create_collection(settings.chroma_collection)
    except Exception as exc:
        raise StoreError(
            f"Cannot open collection {settings.chroma_collection!r} at "
            f"{settings.chroma_host}:{settings.chroma_port}: {exc}"
        ) from exc
    logger.info("Chroma collection %r ready", settings.chroma_collection)
    return collection


def build_cache(settings: Settings) -> Redis | None:
    """Return a Redis client, or ``None`` if no cache URL is configured."""
    if not settings.redis_url:
        return None

    import redis

    try:
        return redis.Redis.from_url(settings.redis_url, password=settings.redis_token or None)
    except Exception as exc:
        raise StoreError(f"Invalid cache endpoint {settings.redis_url!r}: {exc}") from exc


def build_gateway(settings: Settings) -> ChromaStoreGateway:
    """Assemble a :class:`ChromaStoreGateway` from *settings*."""
    return ChromaStoreGateway(
        collection=build_collection(settings),
        embeddings=build_embeddings(settings),
        cache=build_cache(settings),
    )
