"""Storage-event entry point for embed_news."""

import logging
from typing import Any

from common.cli_helpers import setup_logging
from common.config import get_config
from embed_news.embed_news import process_batch
from embed_news.helpers import is_batch_key, iter_storage_records
from embed_news.models import EmbedSettings
from providers.base import BlobStore, Embedder, VectorIndex
from providers.factory import build_blob_store, build_embedder, build_vector_index

setup_logging()
logger = logging.getLogger(__name__)


def process_event(
    event: dict[str, Any],
    blob_store: BlobStore,
    embedder: Embedder,
    vector_index: VectorIndex,
    settings: EmbedSettings,
) -> dict:
    """Process every batch named in the event, isolating failures per record.

    Raises:
        RuntimeError: If every processed record failed.
    """
    records = list(iter_storage_records(event))
    logger.info("Processing news for RAG: %d records", len(records))

    results = []
    skipped = 0
    for i, (bucket, key) in enumerate(records, 1):
        if not is_batch_key(key):
            logger.info("Skipping non-batch object s3://%s/%s", bucket, key)
            skipped += 1
            continue

        logger.info("Processing record %d/%d: s3://%s/%s", i, len(records), bucket, key)
        try:
            result = process_batch(key, blob_store, embedder, vector_index, settings)
        except Exception as e:
            logger.exception("Failed to process s3://%s/%s", bucket, key)
            results.append({"success": False, "bucket": bucket, "key": key, "error": str(e)})
            continue
        results.append({"success": True, "bucket": bucket, "key": key, "processed": result.processed})

    successful = sum(1 for r in results if r["success"])
    failed = len(results) - successful
    logger.info("RAG processing completed: %d successful, %d failed, %d skipped", successful, failed, skipped)

    if results and failed == len(results):
        raise RuntimeError(f"All {failed} records failed to process")

    return {
        "total": len(records),
        "successful": successful,
        "failed": failed,
        "skipped": skipped,
        "results": results,
    }


def handler(event: dict[str, Any], context: Any = None) -> dict:
    config = get_config()
    settings = EmbedSettings.from_config(config.embedding, config.retry.to_policy())
    return process_event(
        event,
        blob_store=build_blob_store(config),
        embedder=build_embedder(config),
        vector_index=build_vector_index(config),
        settings=settings,
    )
