"""Search endpoint: semantic similarity search over the caller's transcripts."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from src.api.dependencies import ChunkStore, CurrentUserId, Embedder
from src.api.models import ErrorResponse, SearchResponse
from src.config import settings
from src.retrieval.search import search_transcripts

router = APIRouter()


@router.get(
    "/api/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def search(
    user_id: CurrentUserId,
    embedder: Embedder,
    store: ChunkStore,
    q: Annotated[str | None, Query()] = None,
    limit: Annotated[int | None, Query(gt=0)] = None,
    threshold: Annotated[float | None, Query()] = None,
) -> SearchResponse:
    """Return the caller's chunks ranked by similarity to ``q``.

    An empty ``results`` list means nothing cleared the threshold.
    """
    rows = search_transcripts(
        user_id,
        q or "",
        embedder,
        store,
        limit=settings.search_limit if limit is None else limit,
        threshold=settings.search_threshold if threshold is None else threshold,
    )
    return SearchResponse(results=rows, query=q or "")
