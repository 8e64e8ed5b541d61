"""Exception hierarchy for ingestion and search."""

from __future__ import annotations


class PodcastSearchError(Exception):
    """Base class for all service errors."""


class UnauthenticatedError(PodcastSearchError):
    """The caller has no valid session."""


class InvalidInputError(PodcastSearchError):
    """A required field is missing or a parameter is out of range."""


class EmbeddingError(PodcastSearchError):
    """The embedding provider failed to return a vector."""


class StorageError(PodcastSearchError):
    """The storage provider rejected an insert or search call."""


class PipelineError(PodcastSearchError):
    """An unexpected failure aborted an ingestion run.

    Chunks stored before the failure are left in place.
    """

    def __init__(self, message: str, elapsed_ms: int) -> None:
        super().__init__(message)
        self.elapsed_ms = elapsed_ms
