"""Tests for the semantic search query path."""

from __future__ import annotations

import pytest

from src.errors import InvalidInputError
from src.retrieval.search import search_transcripts
from tests.conftest import TEST_USER_ID, FakeChunkStore, FakeEmbedder


class TestSearchTranscripts:
    def test_passes_embedding_and_scope_to_store(self, embedder: FakeEmbedder) -> None:
        store = FakeChunkStore(matches=[{"id": "a", "content": "hi", "similarity": 0.8}])
        results = search_transcripts(
            TEST_USER_ID, "pricing", embedder, store, limit=3, threshold=0.7
        )

        assert results == [{"id": "a", "content": "hi", "similarity": 0.8}]
        assert embedder.calls == ["pricing"]
        assert store.search_calls == [
            {"embedding": [0.1, 0.2, 0.3], "threshold": 0.7, "limit": 3, "user_id": TEST_USER_ID}
        ]

    def test_defaults(self, embedder: FakeEmbedder, store: FakeChunkStore) -> None:
        search_transcripts(TEST_USER_ID, "pricing", embedder, store)
        assert store.search_calls[0]["limit"] == 5
        assert store.search_calls[0]["threshold"] == 0.5

    def test_no_matches_is_empty_list(self, embedder: FakeEmbedder, store: FakeChunkStore) -> None:
        assert search_transcripts(TEST_USER_ID, "nothing", embedder, store) == []

    def test_empty_query_rejected(self, embedder: FakeEmbedder, store: FakeChunkStore) -> None:
        with pytest.raises(InvalidInputError):
            search_transcripts(TEST_USER_ID, "", embedder, store)
        assert embedder.calls == []
        assert store.search_calls == []
