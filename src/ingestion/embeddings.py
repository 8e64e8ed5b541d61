"""Embedding providers: OpenAI text-embedding-3-small and a hosted BGE endpoint."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from openai import OpenAI, OpenAIError

from src.errors import EmbeddingError
from src.pipeline_config import EmbeddingConfig, EmbeddingProvider

logger = logging.getLogger(__name__)

OPENAI_DIMENSION = 1536
BGE_DIMENSION = 768  # bge-base-en-v1.5


class EmbeddingService(Protocol):
    """Anything that turns text into a fixed-dimension vector."""

    def generate_embedding(self, text: str) -> list[float]: ...

    def get_dimension(self) -> int: ...


class OpenAIEmbeddingService:
    """Embeddings via the OpenAI embeddings API."""

    def __init__(self, api_key: str, model: str = "text-embedding-3-small") -> None:
        if not api_key:
            raise ValueError("OPENAI_API_KEY is not set")
        self._client = OpenAI(api_key=api_key)
        self._model = model

    def generate_embedding(self, text: str) -> list[float]:
        try:
            response = self._client.embeddings.create(model=self._model, input=text.strip())
        except OpenAIError as exc:
            logger.error("OpenAI embedding request failed: %s", exc)
            raise EmbeddingError("Failed to generate embedding with OpenAI") from exc
        return response.data[0].embedding

    def get_dimension(self) -> int:
        return OPENAI_DIMENSION


def _unwrap_bge_response(payload: Any) -> list[float]:
    """Extract the first embedding from a BGE inference endpoint response.

    Hugging Face style endpoints return either ``[[...]]`` (one vector per
    input) or a bare ``[...]``; some wrappers return ``{"embeddings": [[...]]}``.
    """
    vector: Any = None
    if isinstance(payload, list) and payload:
        vector = payload[0] if isinstance(payload[0], list) else payload
    elif isinstance(payload, dict) and isinstance(payload.get("embeddings"), list):
        if payload["embeddings"]:
            vector = payload["embeddings"][0]

    if not isinstance(vector, list) or not vector:
        raise EmbeddingError("Unexpected BGE API response structure")
    # bool is an int subclass but never a valid component
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in vector):
        raise EmbeddingError("BGE API returned a non-numeric embedding")
    return [float(v) for v in vector]


class BGEEmbeddingService:
    """Embeddings via a hosted bge-base-en-v1.5 inference endpoint."""

    def __init__(self, endpoint_url: str, api_token: str, timeout: float = 30.0) -> None:
        if not endpoint_url:
            raise ValueError("BGE_API_ENDPOINT_URL is not set")
        if not api_token:
            raise ValueError("BGE_API_TOKEN is not set")
        self._endpoint_url = endpoint_url
        self._api_token = api_token
        self._timeout = timeout

    def generate_embedding(self, text: str) -> list[float]:
        try:
            r = httpx.post(
                self._endpoint_url,
                headers={"Authorization": f"Bearer {self._api_token}"},
                json={"inputs": text.strip()},
                timeout=self._timeout,
            )
            r.raise_for_status()
            payload = r.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "BGE request failed with status %d: %s",
                exc.response.status_code,
                exc.response.text,
            )
            raise EmbeddingError("Failed to generate embedding with BGE API") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("BGE request failed: %s", exc)
            raise EmbeddingError("Failed to generate embedding with BGE API") from exc
        return _unwrap_bge_response(payload)

    def get_dimension(self) -> int:
        return BGE_DIMENSION


def create_embedding_service(config: EmbeddingConfig) -> EmbeddingService:
    """Construct the embedding provider named by *config*.

    Raises:
        ValueError: If the selected provider's credentials are missing.
    """
    if config.provider is EmbeddingProvider.BGE:
        return BGEEmbeddingService(
            config.bge_endpoint_url,
            config.bge_api_token,
            timeout=config.bge_timeout_seconds,
        )
    return OpenAIEmbeddingService(config.openai_api_key, model=config.openai_model)
