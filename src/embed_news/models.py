"""Data models for embed_news pipeline stage."""

from dataclasses import dataclass

from common.config import EmbeddingConfig
from common.retry import RetryPolicy


@dataclass
class EmbedSettings:
    """Limits for one embedding invocation."""
    dimension: int = 1536
    max_documents: int = 50
    max_chars: int = 8000
    concurrency: int = 2
    metadata_content_chars: int = 1000
    retry: RetryPolicy = RetryPolicy(attempts=2)

    @classmethod
    def from_config(cls, embedding: EmbeddingConfig, retry: RetryPolicy) -> "EmbedSettings":
        return cls(
            dimension=embedding.dimension,
            max_documents=embedding.max_documents,
            max_chars=embedding.max_chars,
            concurrency=embedding.concurrency,
            retry=retry,
        )


@dataclass
class EmbedResult:
    """Outcome of embedding one staged batch."""
    batch_key: str
    total: int
    processed: int
    failed: int
    skipped: int
