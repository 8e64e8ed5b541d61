"""Semantic search over a user's stored transcript chunks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from src.errors import InvalidInputError

if TYPE_CHECKING:
    from src.ingestion.embeddings import EmbeddingService
    from src.ingestion.storage import SupabaseChunkStore

logger = logging.getLogger(__name__)


def search_transcripts(
    user_id: str,
    query: str,
    embedder: EmbeddingService,
    store: SupabaseChunkStore,
    limit: int = 5,
    threshold: float = 0.5,
) -> list[dict[str, Any]]:
    """Return the user's chunks most similar to *query*.

    Ranking, threshold filtering and user scoping happen in the storage
    provider; the result list is returned as-is (empty when nothing clears
    *threshold*).

    Raises:
        InvalidInputError: If *query* is empty.
    """
    if not query:
        raise InvalidInputError("Missing required parameter: q")

    embedding = embedder.generate_embedding(query)
    results = store.match_chunks(embedding, threshold=threshold, limit=limit, user_id=user_id)
    logger.info("Search for user %s returned %d results", user_id, len(results))
    return results
