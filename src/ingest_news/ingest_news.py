"""Fetch news for a topic, drop already-seen URLs and stage the new batch."""

import logging
from datetime import datetime, timezone
from typing import Optional

from common.hashing import hash_url
from ingest_news.models import IngestResult
from ingest_news.url_cache import DEFAULT_MAX_SIZE, ProcessedUrlCache
from providers.base import BlobStore, DocumentSource

logger = logging.getLogger(__name__)

BATCH_PREFIX = "news-"


def build_batch_key(now: datetime) -> str:
    """Batch blob key, e.g. ``news-1718000000000.json`` (epoch milliseconds)."""
    return f"{BATCH_PREFIX}{int(now.timestamp() * 1000)}.json"


def ingest_news(
    topic: str,
    page: int,
    page_size: int,
    source: DocumentSource,
    blob_store: BlobStore,
    cache_max_size: int = DEFAULT_MAX_SIZE,
    now: Optional[datetime] = None,
    headlines: bool = False,
) -> IngestResult:
    """Fetch one page of articles for ``topic`` and stage the unseen ones.

    Source failures propagate. Writing the batch must succeed; updating the
    processed-URL cache afterwards is best-effort.

    Args:
        topic: Search query
        page: Page number requested from the source (1-based)
        page_size: Maximum number of documents to keep
        source: Document source client
        blob_store: Storage for the batch and the processed-URL cache
        cache_max_size: Cap on the number of cached URL hashes
        now: Timestamp used for the batch key (default: current UTC time)
        headlines: Fetch top headlines matching ``topic`` instead of searching all articles

    Returns:
        IngestResult summarizing the run
    """
    logger.info(
        "Requesting %s: topic=%r page=%d page_size=%d",
        "top headlines" if headlines else "news",
        topic,
        page,
        page_size,
    )

    if headlines:
        documents = source.get_top_headlines(query=topic, page=page, page_size=page_size)
    else:
        documents = source.search_news(topic, page=page, page_size=page_size, sort_by="relevancy")
    if len(documents) > page_size:
        logger.warning("Source returned %d articles for page_size=%d, truncating", len(documents), page_size)
    documents = documents[:page_size]

    cache = ProcessedUrlCache.load(blob_store, max_size=cache_max_size)
    new_documents, duplicates = cache.partition(documents)
    logger.info(
        "Fetched %d articles: %d new, %d already processed",
        len(documents),
        len(new_documents),
        len(duplicates),
    )

    result = IngestResult(
        topic=topic,
        fetched=len(documents),
        new=len(new_documents),
        duplicates=len(duplicates),
    )

    if not new_documents:
        logger.info("No new articles for %r, nothing to stage", topic)
        return result

    batch_key = build_batch_key(now or datetime.now(timezone.utc))
    blob_store.put_json(batch_key, [document.to_dict() for document in new_documents])
    result.batch_key = batch_key
    logger.info("Staged %d new articles to %s", len(new_documents), batch_key)

    cache.add(hash_url(document.url) for document in new_documents)
    try:
        cache.save(blob_store)
        result.cache_saved = True
    except Exception as e:
        # Cost of a lost update is a later re-ingestion, which upserts idempotently.
        logger.error("Failed to update processed-URL cache: %s", e)

    return result
