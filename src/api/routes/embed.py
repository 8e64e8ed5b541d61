"""Embed endpoint: chunk, embed and store an uploaded transcript."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.api.dependencies import ChunkStore, CurrentUserId, Embedder
from src.api.models import EmbedRequest, EmbedResponse, ErrorResponse
from src.config import settings
from src.errors import InvalidInputError, PipelineError
from src.ingestion.pipeline import ingest_transcript

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/api/embed",
    response_model=EmbedResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    # The body is parsed by hand after authentication; document its schema here.
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": EmbedRequest.model_json_schema()}},
        }
    },
)
async def embed(
    http_request: Request,
    user_id: CurrentUserId,
    embedder: Embedder,
    store: ChunkStore,
) -> EmbedResponse | JSONResponse:
    """Ingest a transcript for the authenticated user.

    The session is checked before the body is read, so an anonymous caller
    gets 401 whatever it sends. Chunks that fail to embed or store are
    skipped, so ``chunks_processed`` may be lower than ``total`` even on
    success.
    """
    raw = await http_request.body()
    logger.debug("Embed request body size: %.2f KB", len(raw) / 1024)
    try:
        request = EmbedRequest.model_validate_json(raw)
    except ValidationError as exc:
        errors = exc.errors()
        detail = errors[0].get("msg", "invalid body") if errors else "invalid body"
        raise InvalidInputError(f"Invalid JSON in request body: {detail}") from exc

    logger.info(
        "Embed request from user %s for episode %s (%d chars)",
        user_id,
        request.episode_id,
        len(request.content),
    )
    try:
        # Provider calls block; run the pipeline off the event loop.
        result = await asyncio.to_thread(
            ingest_transcript,
            user_id,
            request.episode_id,
            request.content,
            embedder,
            store,
            chunk_size=request.chunk_size,
            chunk_overlap=request.chunk_overlap,
            batch_size=settings.ingest_batch_size,
            batch_pause=settings.ingest_batch_pause_seconds,
        )
    except PipelineError as exc:
        # Already-stored chunks stay; report elapsed time so clients can tell a timeout apart.
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process transcript", "processing_time_ms": exc.elapsed_ms},
        )

    return EmbedResponse(
        success=True,
        message=result.message,
        chunks_processed=result.chunks_processed,
        total=result.total,
        processing_time_ms=result.processing_time_ms,
    )
