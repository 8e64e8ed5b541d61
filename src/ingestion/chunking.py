"""Overlapping, timestamp-aware chunking for markdown podcast transcripts."""

from __future__ import annotations

import re

from src.errors import InvalidInputError
from src.ingestion.models import TranscriptChunk

# [HH:MM] or [HH:MM:SS], anywhere in a line
TIMESTAMP_RE = re.compile(r"\[(\d{2}):(\d{2})(?::(\d{2}))?\]")


def parse_timestamp(text: str) -> int | None:
    """Return the first ``[HH:MM(:SS)]`` marker in *text* as seconds, or None."""
    match = TIMESTAMP_RE.search(text)
    if match is None:
        return None
    hours, minutes, seconds = match.groups()
    return int(hours) * 3600 + int(minutes) * 60 + int(seconds or 0)


def _overlap_seed(buffer: str, overlap: int) -> str:
    """Return the tail of *buffer* that seeds the next chunk.

    Prefers to start just after the last newline that precedes the final
    *overlap* characters so the next chunk begins on a line boundary; falls
    back to exactly the last *overlap* characters.
    """
    cut = buffer.rfind("\n", 0, len(buffer) - overlap)
    if cut != -1:
        return buffer[cut + 1 :]
    return buffer[len(buffer) - overlap :]


def chunk_transcript(
    content: str,
    chunk_size: int = 1000,
    overlap: int = 200,
) -> list[TranscriptChunk]:
    """Split a transcript into overlapping, timestamped chunks.

    Lines are appended whole to a running buffer; once the buffer reaches
    *chunk_size* characters it is emitted and its tail carried into the next
    chunk as overlap. ``start_time`` is the marker at the top of a chunk and
    ``end_time`` the latest marker seen when the chunk closes.

    Args:
        content: Raw transcript text.
        chunk_size: Character length that triggers a chunk boundary.
        overlap: Characters carried over between consecutive chunks.

    Returns:
        Chunks in document order.

    Raises:
        InvalidInputError: If *chunk_size* is not positive or *overlap* is
            negative or not smaller than *chunk_size*.
    """
    if chunk_size <= 0:
        raise InvalidInputError(f"chunk_size must be positive, got {chunk_size}")
    if overlap < 0 or overlap >= chunk_size:
        raise InvalidInputError(
            f"chunk_overlap must be in [0, chunk_size), got {overlap} for chunk_size {chunk_size}"
        )
    if not content:
        return []

    chunks: list[TranscriptChunk] = []
    buffer = ""
    start_time = 0
    current_time = 0
    # True once the buffer holds text that no emitted chunk contains yet
    fresh = False

    for line in content.split("\n"):
        marker = parse_timestamp(line)
        if marker is not None:
            current_time = marker
            if not buffer:
                start_time = current_time

        buffer += line + "\n"
        if line.strip():
            fresh = True

        if fresh and len(buffer) >= chunk_size:
            chunks.append(
                TranscriptChunk(
                    text=buffer.strip(),
                    start_time=min(start_time, current_time),
                    end_time=current_time,
                )
            )
            buffer = _overlap_seed(buffer, overlap)
            fresh = False

            # A seed without a marker was spoken after the last one seen.
            seed_marker = parse_timestamp(buffer)
            start_time = seed_marker if seed_marker is not None else current_time

    if fresh and buffer.strip():
        chunks.append(
            TranscriptChunk(
                text=buffer.strip(),
                start_time=min(start_time, current_time),
                end_time=current_time,
            )
        )

    return chunks
