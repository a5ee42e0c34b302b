"""Data models shared by the ingestion, embedding and newsletter stages."""

from dataclasses import dataclass, field
from typing import Any, Optional

from common.errors import ValidationError
from common.serialization import serialize_dataclass


@dataclass(frozen=True)
class Document:
    """News article as staged in blob storage. ``url`` is the dedup key."""
    title: str
    url: str
    published_at: str
    source_name: str
    description: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Document":
        """Build a Document from a staged record or a raw news API article."""
        if not isinstance(data, dict):
            raise ValidationError(f"Expected article object, got {type(data).__name__}")

        title = data.get("title")
        url = data.get("url")
        if not title or not url:
            raise ValidationError(f"Article missing title or url: url={url!r}")

        source_name = data.get("source_name")
        if source_name is None:
            source = data.get("source")
            if isinstance(source, dict):
                source_name = source.get("name")
            elif isinstance(source, str):
                source_name = source

        return cls(
            title=title,
            url=url,
            published_at=data.get("published_at") or data.get("publishedAt") or "",
            source_name=source_name or "Unknown",
            description=data.get("description"),
            content=data.get("content"),
            author=data.get("author"),
        )

    def to_dict(self) -> dict:
        return serialize_dataclass(self)


@dataclass
class VectorRecord:
    """Unit stored in the vector index."""
    id: str
    values: list[float]
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"id": self.id, "values": self.values, "metadata": self.metadata}


@dataclass
class SearchResult:
    """Similarity match returned by the vector index (higher score = closer)."""
    id: str
    score: float
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class DeliveryResult:
    message_id: str
    recipient_count: int
