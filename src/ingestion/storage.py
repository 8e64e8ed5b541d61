"""Supabase storage helpers for podcast transcript chunks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from src.config import settings
from src.errors import StorageError

if TYPE_CHECKING:
    from src.ingestion.models import TranscriptChunk

logger = logging.getLogger(__name__)

CHUNKS_TABLE = "podcast_chunks"
MATCH_FUNCTION = "match_podcast_chunks"


def get_supabase_client() -> Client:
    """Create and return a Supabase client from settings."""
    return create_client(settings.supabase_url, settings.supabase_key)


class SupabaseChunkStore:
    """Inserts chunks into ``podcast_chunks`` and runs similarity search over them."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def insert_chunk(
        self,
        user_id: str,
        episode_id: str,
        chunk: TranscriptChunk,
        embedding: list[float],
    ) -> str:
        """Store one chunk with its embedding and return the generated ID."""
        try:
            result = (
                self._client.table(CHUNKS_TABLE)
                .insert(
                    {
                        "user_id": user_id,
                        "episode_id": episode_id,
                        "content": chunk.text,
                        "start_time": chunk.start_time,
                        "end_time": chunk.end_time,
                        "embedding": embedding,
                    }
                )
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise StorageError(f"Insert into {CHUNKS_TABLE} failed: {exc}") from exc

        rows = cast(list[dict[str, Any]], result.data)
        if not rows or rows[0].get("id") is None:
            raise StorageError(f"Insert into {CHUNKS_TABLE} returned no rows")
        return str(rows[0]["id"])

    def match_chunks(
        self,
        embedding: list[float],
        threshold: float,
        limit: int,
        user_id: str,
    ) -> list[dict[str, Any]]:
        """Rank the user's chunks by similarity to *embedding*.

        Delegates to the ``match_podcast_chunks`` Postgres function, which
        filters by ``user_id`` and drops rows at or below *threshold*.
        """
        try:
            result = self._client.rpc(
                MATCH_FUNCTION,
                {
                    "query_embedding": embedding,
                    "match_threshold": threshold,
                    "match_count": limit,
                    "user_id": user_id,
                },
            ).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StorageError(f"Similarity search failed: {exc}") from exc
        # Supabase .data is typed as JSON (broad union); cast to concrete type.
        return cast(list[dict[str, Any]], result.data or [])
