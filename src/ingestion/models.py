"""Data models for the ingestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TranscriptChunk:
    """A timestamped transcript segment ready for embedding and storage.

    Times are whole seconds; both stay at 0 until a ``[HH:MM(:SS)]`` marker
    has been seen.
    """

    text: str
    start_time: int = 0
    end_time: int = 0


@dataclass
class ChunkFailure:
    """A chunk that could not be embedded or stored."""

    index: int
    reason: str


@dataclass
class IngestResult:
    """Outcome of one ingestion run."""

    chunks_processed: int
    total: int
    stored_ids: list[str] = field(default_factory=list)
    failures: list[ChunkFailure] = field(default_factory=list)
    processing_time_ms: int = 0

    @property
    def message(self) -> str:
        return f"Processed {self.chunks_processed} chunks out of {self.total}"
