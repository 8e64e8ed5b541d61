"""Pydantic request/response schemas for the Podcast Search API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class EmbedRequest(BaseModel):
    """Request body for the /api/embed endpoint.

    ``episode_id`` and ``content`` default to empty so that missing fields
    reach the pipeline's own validation and come back as a 400.
    """

    episode_id: str = ""
    content: str = ""
    chunk_size: int | None = None
    chunk_overlap: int | None = None


class EmbedResponse(BaseModel):
    """Response body for the /api/embed endpoint."""

    success: bool
    message: str
    chunks_processed: int
    total: int
    processing_time_ms: int


class SearchResponse(BaseModel):
    """Response body for the /api/search endpoint.

    ``results`` holds the rows of the similarity search function unchanged.
    """

    results: list[dict[str, Any]]
    query: str


class ErrorResponse(BaseModel):
    """Structured error payload returned with every non-2xx status."""

    error: str
    processing_time_ms: int | None = None
