"""Ingest local transcript files for a user, bypassing the HTTP API.

Usage: python scripts/ingest_transcript.py --user <uuid> episodes/*.md

Each file's stem is used as its episode ID unless --episode is given.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import settings
from src.errors import PodcastSearchError
from src.ingestion.embeddings import create_embedding_service
from src.ingestion.pipeline import ingest_transcript
from src.ingestion.storage import SupabaseChunkStore, get_supabase_client
from src.pipeline_config import EmbeddingConfig


def ingest_files(
    user_id: str,
    paths: list[str],
    episode_id: str | None = None,
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
) -> int:
    """Ingest each file and return the number of files that failed."""
    embedder = create_embedding_service(EmbeddingConfig.from_settings(settings))
    store = SupabaseChunkStore(get_supabase_client())

    print(f"Ingesting {len(paths)} transcripts with {settings.embedding_provider} embeddings...")
    errors = 0

    for i, path in enumerate(paths):
        filepath = Path(path)
        episode = episode_id or filepath.stem
        try:
            content = filepath.read_text(encoding="utf-8")
            result = ingest_transcript(
                user_id,
                episode,
                content,
                embedder,
                store,
                chunk_size=chunk_size,
                chunk_overlap=chunk_overlap,
                batch_size=settings.ingest_batch_size,
                batch_pause=settings.ingest_batch_pause_seconds,
            )
            print(
                f"  [{i + 1}/{len(paths)}] {episode} -- "
                f"{result.chunks_processed}/{result.total} chunks in {result.processing_time_ms}ms"
            )
        except (OSError, PodcastSearchError) as e:
            errors += 1
            print(f"  [{i + 1}] ERROR {filepath.name}: {e}")

    print(f"\nDone! {len(paths) - errors} ingested, {errors} errors.")
    return errors


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("paths", nargs="+")
    parser.add_argument("--user", required=True, help="Owner user ID")
    parser.add_argument("--episode", default=None, help="Episode ID (single file only)")
    parser.add_argument("--chunk-size", type=int, default=None)
    parser.add_argument("--chunk-overlap", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper())
    if args.episode and len(args.paths) > 1:
        parser.error("--episode can only be used with a single file")
    failed = ingest_files(args.user, args.paths, args.episode, args.chunk_size, args.chunk_overlap)
    sys.exit(1 if failed else 0)
