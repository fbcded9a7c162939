"""
Store — vector collection and cache behind one gateway.

Public surface
--------------
- :class:`StoreGateway` — abstract backend.
- :class:`ChromaStoreGateway` — Chroma collection + optional Redis cache.
- :func:`build_gateway` — construct the default gateway from settings.
"""

from typing import Any

from resume_rag.store.base import StoreGateway

__all__ = [
    "ChromaStoreGateway",
    "StoreGateway",
    "build_gateway",
]


def __getattr__(name: str) -> Any:
    """Lazy-import the Chroma backend to avoid pulling in SDKs at import time."""
    if name == "ChromaStoreGateway":
        from resume_rag.store.chroma_store import ChromaStoreGateway

        return ChromaStoreGateway
    if name == "build_gateway":
        from resume_rag.store.clients import build_gateway

        return build_gateway
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
