"""Embedding provider configuration: provider enum and EmbeddingConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.config import Settings


class EmbeddingProvider(str, Enum):
    """Supported embedding backends."""

    OPENAI = "openai"
    BGE = "bge"


@dataclass(frozen=True)
class EmbeddingConfig:
    """Immutable configuration for the embedding provider.

    Built once at process start and handed to
    :func:`src.ingestion.embeddings.create_embedding_service`; nothing else
    reads provider credentials from the environment.
    """

    provider: EmbeddingProvider = EmbeddingProvider.OPENAI
    openai_api_key: str = ""
    openai_model: str = "text-embedding-3-small"
    bge_endpoint_url: str = ""
    bge_api_token: str = ""
    bge_timeout_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> EmbeddingConfig:
        """Build a config from application settings.

        Raises:
            ValueError: If ``settings.embedding_provider`` is not a known provider.
        """
        return cls(
            provider=EmbeddingProvider(settings.embedding_provider.lower()),
            openai_api_key=settings.openai_api_key,
            openai_model=settings.embedding_model,
            bge_endpoint_url=settings.bge_api_endpoint_url,
            bge_api_token=settings.bge_api_token,
            bge_timeout_seconds=settings.bge_timeout_seconds,
        )
