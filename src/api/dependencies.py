"""FastAPI dependencies: caller authentication and shared providers.

The embedding provider and chunk store are built once in the app lifespan
and stored on ``app.state``; routes receive them through ``Depends`` so
tests can swap them via ``app.dependency_overrides``.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request
from supabase import AuthError, Client

from src.errors import UnauthenticatedError
from src.ingestion.embeddings import EmbeddingService
from src.ingestion.storage import SupabaseChunkStore

logger = logging.getLogger(__name__)


def get_supabase(request: Request) -> Client:
    client: Client | None = getattr(request.app.state, "supabase", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Supabase is not configured")
    return client


def get_current_user_id(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Resolve the caller's user ID from a ``Bearer`` Supabase access token.

    Raises:
        UnauthenticatedError: If the header is missing or the token is rejected.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        logger.info("Authentication failed: no bearer token")
        raise UnauthenticatedError("Unauthorized")

    token = authorization.split(" ", 1)[1].strip()
    client = get_supabase(request)
    try:
        response = client.auth.get_user(token)
    except AuthError as exc:
        logger.info("Authentication failed: %s", exc)
        raise UnauthenticatedError("Unauthorized") from exc

    if response is None or response.user is None:
        raise UnauthenticatedError("Unauthorized")
    return str(response.user.id)


def get_embedder(request: Request) -> EmbeddingService:
    embedder: EmbeddingService | None = getattr(request.app.state, "embedder", None)
    if embedder is None:
        raise HTTPException(status_code=503, detail="Embedding provider is not configured")
    return embedder


def get_chunk_store(client: Annotated[Client, Depends(get_supabase)]) -> SupabaseChunkStore:
    return SupabaseChunkStore(client)


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
Embedder = Annotated[EmbeddingService, Depends(get_embedder)]
ChunkStore = Annotated[SupabaseChunkStore, Depends(get_chunk_store)]
