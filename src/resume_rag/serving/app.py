"""FastAPI application exposing résumé search to the chat frontend."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from resume_rag.config import get_settings
from resume_rag.errors import IngestionError
from resume_rag.store.base import StoreGateway

app = FastAPI(
    title="Résumé Search API",
    version="0.1.0",
    description="Similarity search over the embedded résumé chunks.",
)


@lru_cache(maxsize=1)
def _build_gateway() -> StoreGateway:
    from resume_rag.store.clients import build_gateway

    return build_gateway(get_settings())


def get_gateway() -> StoreGateway:
    """Return the process-wide store gateway, built on first use."""
    try:
        return _build_gateway()
    except IngestionError as exc:
        raise HTTPException(status_code=502, detail=f"{exc.category}: {exc}") from exc


# ── Request / Response schemas ────────────────────────────────────────
class SearchRequest(BaseModel):
    """Incoming chat query."""

    query: str = Field(min_length=1)
    k: int = Field(default=4, ge=1, le=20)


class SearchMatch(BaseModel):
    """One matching chunk."""

    content: str
    section: str
    score: float


class SearchResponse(BaseModel):
    """Ranked matches, best first."""

    matches: list[SearchMatch] = []


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/search", response_model=SearchResponse)
def search(request: SearchRequest, gateway: StoreGateway = Depends(get_gateway)) -> SearchResponse:
    """Return the résumé chunks most similar to the query."""
    try:
        hits = gateway.similarity_search_by_text(request.query, k=request.k)
    except IngestionError as exc:
        raise HTTPException(status_code=502, detail=f"{exc.category}: {exc}") from exc

    return SearchResponse(
        matches=[
            SearchMatch(
                content=hit.content,
                section=hit.metadata.get("section", ""),
                score=hit.score,
            )
            for hit in hits
        ]
    )
