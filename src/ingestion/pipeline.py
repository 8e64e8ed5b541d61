"""End-to-end ingestion pipeline: chunk -> embed -> store, in small batches."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from src.config import settings
from src.errors import InvalidInputError, PipelineError
from src.ingestion.chunking import chunk_transcript
from src.ingestion.models import ChunkFailure, IngestResult

if TYPE_CHECKING:
    from src.ingestion.embeddings import EmbeddingService
    from src.ingestion.storage import SupabaseChunkStore

logger = logging.getLogger(__name__)

BATCH_SIZE = 5


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def ingest_transcript(
    user_id: str,
    episode_id: str,
    content: str,
    embedder: EmbeddingService,
    store: SupabaseChunkStore,
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
    batch_size: int = BATCH_SIZE,
    batch_pause: float = 0.5,
) -> IngestResult:
    """Chunk a transcript, embed each chunk and store it for *user_id*.

    Chunks are processed sequentially in batches of *batch_size*, sleeping
    *batch_pause* seconds between batches. A chunk whose embedding or insert
    fails is logged and skipped; the run carries on with the next chunk.

    Args:
        user_id: Owner of the stored chunks.
        episode_id: Episode the transcript belongs to.
        content: Raw transcript text.
        embedder: Embedding provider.
        store: Chunk store.
        chunk_size: Characters per chunk (defaults to ``settings.chunk_size``).
        chunk_overlap: Overlap characters (defaults to ``settings.chunk_overlap``).
        batch_size: Chunks per batch.
        batch_pause: Seconds to sleep between batches.

    Returns:
        An :class:`IngestResult` with the stored and total chunk counts.

    Raises:
        InvalidInputError: If *content* or *episode_id* is missing, or the
            chunk sizes are invalid.
        PipelineError: If an unexpected error aborts the run. Chunks stored
            before the failure are kept.
    """
    if not content or not episode_id:
        raise InvalidInputError("Missing required fields: content, episode_id")
    if batch_size <= 0:
        raise InvalidInputError(f"batch_size must be positive, got {batch_size}")

    started = time.perf_counter()
    size = settings.chunk_size if chunk_size is None else chunk_size
    overlap = settings.chunk_overlap if chunk_overlap is None else chunk_overlap

    chunks = chunk_transcript(content, size, overlap)
    logger.info(
        "Chunked episode %s into %d chunks in %dms", episode_id, len(chunks), _elapsed_ms(started)
    )

    result = IngestResult(chunks_processed=0, total=len(chunks))
    batches = [chunks[i : i + batch_size] for i in range(0, len(chunks), batch_size)]

    try:
        for batch_idx, batch in enumerate(batches):
            batch_started = time.perf_counter()
            first = batch_idx * batch_size
            logger.debug(
                "Processing batch %d/%d (chunks %d-%d)",
                batch_idx + 1,
                len(batches),
                first + 1,
                first + len(batch),
            )

            for offset, chunk in enumerate(batch):
                index = first + offset
                try:
                    embedding = embedder.generate_embedding(chunk.text)
                    chunk_id = store.insert_chunk(user_id, episode_id, chunk, embedding)
                except Exception as exc:
                    # Any embed or insert failure only costs this chunk.
                    logger.warning("Skipping chunk %d/%d: %s", index + 1, len(chunks), exc)
                    result.failures.append(ChunkFailure(index=index, reason=str(exc)))
                    continue
                result.stored_ids.append(chunk_id)
                result.chunks_processed += 1

            logger.debug("Batch %d done in %dms", batch_idx + 1, _elapsed_ms(batch_started))
            if batch_idx < len(batches) - 1:
                time.sleep(batch_pause)
    except Exception as exc:
        elapsed = _elapsed_ms(started)
        logger.exception("Ingestion of episode %s aborted after %dms", episode_id, elapsed)
        raise PipelineError(f"Failed to process transcript: {exc}", elapsed_ms=elapsed) from exc

    result.processing_time_ms = _elapsed_ms(started)
    logger.info(
        "Stored %d of %d chunks for episode %s in %dms",
        result.chunks_processed,
        result.total,
        episode_id,
        result.processing_time_ms,
    )
    return result
