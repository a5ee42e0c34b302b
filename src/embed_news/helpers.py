"""Helper functions for embed_news."""

from __future__ import annotations

import argparse
import re
from typing import Any, Iterator
from urllib.parse import unquote_plus

BATCH_KEY_PATTERN = re.compile(r"(^|/)news-\d+\.json$")


def is_batch_key(key: str) -> bool:
    """Whether ``key`` names a staged ingestion batch (``[prefix/]news-<epoch-ms>.json``)."""
    return bool(BATCH_KEY_PATTERN.search(key))


def iter_storage_records(event: dict[str, Any]) -> Iterator[tuple[str, str]]:
    """Yield (bucket, key) pairs from an S3 event notification. Keys arrive URL-encoded."""
    for record in event.get("Records") or []:
        s3 = record.get("s3") or {}
        bucket = (s3.get("bucket") or {}).get("name", "")
        key = (s3.get("object") or {}).get("key", "")
        yield bucket, unquote_plus(key)


def parse_embed_news_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for embed_news."""

    parser = argparse.ArgumentParser(description="Embed a staged news batch into the vector index")
    parser.add_argument("--batch-key", required=True, help="Blob key of the staged batch (news-<epoch-ms>.json)")
    parser.add_argument("--config", default=None, help="Config name or path (default: $PIPELINE_CONFIG or prod)")
    parser.add_argument("--local-dir", default=None, help="Read the batch from a local directory instead of S3")
    return parser.parse_args(argv)
