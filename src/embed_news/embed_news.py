"""Core embedding logic: staged batch -> embeddings -> vector index."""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

from common.errors import NoArticlesProcessedError, ValidationError
from common.hashing import hash_url
from common.models import Document, VectorRecord
from common.retry import retry_call
from common.utils import truncate
from embed_news.models import EmbedResult, EmbedSettings
from providers.base import BlobStore, Embedder, VectorIndex

logger = logging.getLogger(__name__)


def parse_batch(raw: str, batch_key: str) -> list[Document]:
    """Parse a staged batch blob into documents.

    Raises:
        ValidationError: If the blob is not valid JSON or not a JSON array.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s (length %d, preview %r)", batch_key, len(raw), raw[:200])
        raise ValidationError(f"Invalid JSON format in {batch_key}") from e

    if not isinstance(data, list):
        logger.error("Batch %s is not an array: %s", batch_key, type(data).__name__)
        raise ValidationError(f"Expected array of articles in {batch_key}, got {type(data).__name__}")

    documents = []
    for i, item in enumerate(data):
        try:
            documents.append(Document.from_dict(item))
        except ValidationError as e:
            logger.warning("Skipping item %d in %s: %s", i, batch_key, e)
    return documents


def build_text_to_embed(document: Document, max_chars: int) -> str:
    """Title, description and content separated by blank lines, truncated to ``max_chars``."""
    parts = [part for part in (document.title, document.description, document.content) if part]
    return truncate("\n\n".join(parts), max_chars)


def build_metadata(document: Document, content_chars: int) -> dict[str, Any]:
    metadata = {
        "title": document.title,
        "url": document.url,
        "publishedAt": document.published_at,
        "source": document.source_name,
        "author": document.author,
        "description": document.description,
        "content": truncate(document.content or document.description, content_chars),
    }
    # Vector stores reject null metadata values
    return {key: value for key, value in metadata.items() if value is not None}


def embed_document(document: Document, embedder: Embedder, settings: EmbedSettings) -> VectorRecord:
    """Embed one document (with retry) and build its vector record.

    Raises:
        ValidationError: If the embedding has the wrong dimension.
    """
    text = build_text_to_embed(document, settings.max_chars)
    values = retry_call(
        embedder.embed,
        text,
        policy=settings.retry,
        description=f"embed {document.url}",
    )
    if len(values) != settings.dimension:
        raise ValidationError(
            f"Embedding dimension {len(values)} does not match index dimension {settings.dimension}"
        )
    return VectorRecord(
        id=hash_url(document.url),
        values=list(values),
        metadata=build_metadata(document, settings.metadata_content_chars),
    )


def _try_embed(document: Document, embedder: Embedder, settings: EmbedSettings) -> Optional[VectorRecord]:
    try:
        return embed_document(document, embedder, settings)
    except Exception as e:
        logger.error("Failed to embed article %r (%s): %s", document.title, document.url, e)
        return None


def embed_documents(
    documents: list[Document], embedder: Embedder, settings: EmbedSettings
) -> list[VectorRecord]:
    """Embed documents in groups of ``settings.concurrency``.

    Each group settles completely before the next starts. Failed documents
    are logged and left out of the result.
    """
    records: list[VectorRecord] = []
    step = settings.concurrency

    with ThreadPoolExecutor(max_workers=step) as pool:
        for start in range(0, len(documents), step):
            group = documents[start:start + step]
            logger.info(
                "Processing batch %d-%d of %d articles", start + 1, start + len(group), len(documents)
            )
            futures = [pool.submit(_try_embed, document, embedder, settings) for document in group]
            for future in futures:
                record = future.result()
                if record is not None:
                    records.append(record)

    return records


def process_batch(
    batch_key: str,
    blob_store: BlobStore,
    embedder: Embedder,
    vector_index: VectorIndex,
    settings: Optional[EmbedSettings] = None,
) -> EmbedResult:
    """Embed a staged batch and upsert the vectors in one call.

    Raises:
        ValidationError: If the batch blob is not a JSON array.
        NoArticlesProcessedError: If no document could be embedded.
    """
    settings = settings or EmbedSettings()

    documents = parse_batch(blob_store.get_text(batch_key), batch_key)
    selected = documents[:settings.max_documents]
    skipped = len(documents) - len(selected)
    logger.info(
        "Processing %s: %d articles, %d skipped over the limit of %d",
        batch_key,
        len(selected),
        skipped,
        settings.max_documents,
    )

    records = embed_documents(selected, embedder, settings)
    if not records:
        raise NoArticlesProcessedError(f"No articles were successfully processed for embeddings in {batch_key}")

    # Same URL twice in a batch maps to one id; keep the last
    unique = list({record.id: record for record in records}.values())
    vector_index.upsert(unique)

    logger.info(
        "Stored %d vectors from %s (%d/%d articles succeeded)",
        len(unique),
        batch_key,
        len(records),
        len(selected),
    )
    return EmbedResult(
        batch_key=batch_key,
        total=len(documents),
        processed=len(records),
        failed=len(selected) - len(records),
        skipped=skipped,
    )
