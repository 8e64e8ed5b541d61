"""HTTP client wrapper for the Podcast Search FastAPI backend."""

from __future__ import annotations

import logging
import os

import httpx

logger = logging.getLogger(__name__)

API_URL = os.getenv("API_URL", "http://localhost:8000")

# Ingestion embeds chunk by chunk, so it gets a much longer budget than search.
INGEST_TIMEOUT = 120.0
SEARCH_TIMEOUT = 30.0


def _auth_headers(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def upload_transcript(
    access_token: str,
    episode_id: str,
    content: str,
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
) -> dict:  # type: ignore[type-arg]
    """Send a transcript to the embed endpoint.

    Returns the decoded response, or an empty dict if the request failed or
    timed out.
    """
    payload: dict[str, object] = {"episode_id": episode_id, "content": content}
    if chunk_size is not None:
        payload["chunk_size"] = chunk_size
    if chunk_overlap is not None:
        payload["chunk_overlap"] = chunk_overlap
    try:
        r = httpx.post(
            f"{API_URL}/api/embed",
            json=payload,
            headers=_auth_headers(access_token),
            timeout=INGEST_TIMEOUT,
        )
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.TimeoutException:
        logger.error("Upload timed out after %.0fs", INGEST_TIMEOUT)
        return {}
    except httpx.HTTPError as e:
        logger.error("Upload failed: %s", e)
        return {}


def search_transcripts(
    access_token: str,
    query: str,
    limit: int | None = None,
    threshold: float | None = None,
) -> dict:  # type: ignore[type-arg]
    """Query the search endpoint."""
    params: dict[str, str | int | float] = {"q": query}
    if limit is not None:
        params["limit"] = limit
    if threshold is not None:
        params["threshold"] = threshold
    try:
        r = httpx.get(
            f"{API_URL}/api/search",
            params=params,
            headers=_auth_headers(access_token),
            timeout=SEARCH_TIMEOUT,
        )
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        logger.error("Search failed: %s", e)
        return {}
