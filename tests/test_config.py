"""Tests for application settings."""

from __future__ import annotations

import pytest

from src.config import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("EMBEDDING_PROVIDER", "CHUNK_SIZE", "CHUNK_OVERLAP", "INGEST_BATCH_SIZE"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.embedding_provider == "openai"
        assert s.chunk_size == 1000
        assert s.chunk_overlap == 200
        assert s.ingest_batch_size == 5
        assert s.search_limit == 5
        assert s.search_threshold == 0.5

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EMBEDDING_PROVIDER", "bge")
        monkeypatch.setenv("CHUNK_SIZE", "1500")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.embedding_provider == "bge"
        assert s.chunk_size == 1500

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()
