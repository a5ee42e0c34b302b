"""Capability interfaces the pipelines depend on.

Each has one production implementation in this package; tests substitute
small fakes.
"""

from typing import Any, Optional, Protocol

from common.models import DeliveryResult, Document, SearchResult, VectorRecord


class DocumentSource(Protocol):
    def search_news(
        self, topic: str, page: int = 1, page_size: int = 10, sort_by: str = "relevancy"
    ) -> list[Document]: ...

    def get_top_headlines(
        self,
        country: Optional[str] = None,
        category: Optional[str] = None,
        query: Optional[str] = None,
        page_size: int = 20,
        page: int = 1,
    ) -> list[Document]: ...


class BlobStore(Protocol):
    def get_text(self, key: str) -> str: ...

    def get_json(self, key: str) -> Any: ...

    def put_json(self, key: str, data: Any) -> None: ...


class Embedder(Protocol):
    def embed(self, text: str) -> list[float]: ...


class VectorIndex(Protocol):
    def upsert(self, records: list[VectorRecord]) -> None: ...

    def search(
        self,
        vector: list[float],
        top_k: int,
        include_metadata: bool = True,
        filter: Optional[dict[str, Any]] = None,
    ) -> list[SearchResult]: ...

    def delete_by_id(self, record_id: str) -> None: ...

    def delete_by_filter(self, filter: dict[str, Any]) -> None: ...

    def get_stats(self) -> dict[str, int]: ...


class Generator(Protocol):
    def generate(self, prompt: str, max_tokens: int = 4096) -> str: ...


class Deliverer(Protocol):
    def send(
        self, recipients: list[str], subject: str, body: str, is_html: bool = True
    ) -> DeliveryResult: ...
