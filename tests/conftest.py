"""Shared fixtures: in-memory embedding provider and chunk store, API client."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_chunk_store, get_current_user_id, get_embedder
from src.api.main import app
from src.errors import EmbeddingError
from src.ingestion.models import TranscriptChunk

TEST_USER_ID = "11111111-1111-1111-1111-111111111111"


class FakeEmbedder:
    """Returns a constant 3-d vector; raises for any text listed in ``fail_on``."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    def generate_embedding(self, text: str) -> list[float]:
        self.calls.append(text)
        if text in self.fail_on:
            raise EmbeddingError(f"embedding failed for {text!r}")
        return [0.1, 0.2, 0.3]

    def get_dimension(self) -> int:
        return 3


class FakeChunkStore:
    """Keeps inserted rows in a list and serves canned search results."""

    def __init__(self, matches: list[dict[str, Any]] | None = None) -> None:
        self.rows: list[dict[str, Any]] = []
        self.matches = matches or []
        self.search_calls: list[dict[str, Any]] = []

    def insert_chunk(
        self,
        user_id: str,
        episode_id: str,
        chunk: TranscriptChunk,
        embedding: list[float],
    ) -> str:
        chunk_id = f"chunk-{len(self.rows) + 1}"
        self.rows.append(
            {
                "id": chunk_id,
                "user_id": user_id,
                "episode_id": episode_id,
                "content": chunk.text,
                "start_time": chunk.start_time,
                "end_time": chunk.end_time,
                "embedding": embedding,
            }
        )
        return chunk_id

    def match_chunks(
        self,
        embedding: list[float],
        threshold: float,
        limit: int,
        user_id: str,
    ) -> list[dict[str, Any]]:
        self.search_calls.append(
            {"embedding": embedding, "threshold": threshold, "limit": limit, "user_id": user_id}
        )
        return self.matches


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def store() -> FakeChunkStore:
    return FakeChunkStore()


@pytest.fixture
def client(embedder: FakeEmbedder, store: FakeChunkStore) -> Iterator[TestClient]:
    """Authenticated API client wired to the fake providers."""
    app.dependency_overrides[get_current_user_id] = lambda: TEST_USER_ID
    app.dependency_overrides[get_embedder] = lambda: embedder
    app.dependency_overrides[get_chunk_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(embedder: FakeEmbedder, store: FakeChunkStore) -> Iterator[TestClient]:
    """API client with real authentication but fake providers."""
    app.dependency_overrides[get_embedder] = lambda: embedder
    app.dependency_overrides[get_chunk_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
