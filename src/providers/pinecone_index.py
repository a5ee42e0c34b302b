"""Pinecone vector index."""

import logging
from typing import Any, Optional

from pinecone import Pinecone, ServerlessSpec

from common.errors import IntegrationError
from common.models import SearchResult, VectorRecord
from common.utils import get_value

logger = logging.getLogger(__name__)

SERVICE = "pinecone"
UPSERT_CHUNK_SIZE = 100
DEFAULT_TIMEOUT = 30


class PineconeVectorIndex:
    """Upsert/search/delete against one Pinecone index."""

    def __init__(
        self,
        api_key: str,
        index_name: str,
        client: Optional[Pinecone] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if not api_key and client is None:
            raise IntegrationError(SERVICE, "Pinecone API key is not set")
        self.index_name = index_name
        # Forwarded as the per-request timeout (seconds) on every data-plane call
        self.timeout = timeout
        self.client = client or Pinecone(api_key=api_key)
        self._index = None

    @property
    def index(self):
        if self._index is None:
            self._index = self.client.Index(self.index_name)
        return self._index

    def ensure_index(
        self, dimension: int, metric: str = "cosine", cloud: str = "aws", region: str = "us-east-1"
    ) -> bool:
        """Create the index if it doesn't exist. Returns True if it was created."""
        try:
            existing = self.client.list_indexes().names()
            if self.index_name in existing:
                logger.info("Pinecone index %s already exists", self.index_name)
                return False
            self.client.create_index(
                name=self.index_name,
                dimension=dimension,
                metric=metric,
                spec=ServerlessSpec(cloud=cloud, region=region),
            )
        except Exception as e:
            logger.error("Error creating Pinecone index %s: %s", self.index_name, e)
            raise IntegrationError(SERVICE, f"create index {self.index_name} failed: {e}") from e
        logger.info("Created Pinecone index %s (dimension=%d, metric=%s)", self.index_name, dimension, metric)
        return True

    def upsert(self, records: list[VectorRecord]) -> None:
        logger.info("Upserting %d vectors to Pinecone index %s", len(records), self.index_name)
        try:
            for start in range(0, len(records), UPSERT_CHUNK_SIZE):
                chunk = records[start:start + UPSERT_CHUNK_SIZE]
                self.index.upsert(
                    vectors=[record.to_dict() for record in chunk], _request_timeout=self.timeout
                )
        except Exception as e:
            logger.error(
                "Error upserting %d vectors to Pinecone index %s: %s", len(records), self.index_name, e
            )
            raise IntegrationError(
                SERVICE, f"upsert of {len(records)} vectors to {self.index_name} failed: {e}"
            ) from e
        logger.info("Upserted vector ids: %s", [record.id for record in records])

    def search(
        self,
        vector: list[float],
        top_k: int,
        include_metadata: bool = True,
        filter: Optional[dict[str, Any]] = None,
    ) -> list[SearchResult]:
        logger.info(
            "Searching Pinecone index %s (top_k=%d, filter=%s)", self.index_name, top_k, bool(filter)
        )
        query: dict[str, Any] = {"vector": vector, "top_k": top_k, "include_metadata": include_metadata}
        if filter:
            query["filter"] = filter
        try:
            response = self.index.query(**query, _request_timeout=self.timeout)
        except Exception as e:
            logger.error("Error searching Pinecone index %s: %s", self.index_name, e)
            raise IntegrationError(SERVICE, f"search in {self.index_name} failed: {e}") from e

        # Matches are objects in current clients and dicts in older ones
        results = [
            SearchResult(
                id=get_value(match, "id"),
                score=get_value(match, "score") or 0.0,
                metadata=dict(get_value(match, "metadata") or {}),
            )
            for match in (get_value(response, "matches") or [])
        ]
        logger.info("Pinecone returned %d matches", len(results))
        return results

    def delete_by_id(self, record_id: str) -> None:
        try:
            self.index.delete(ids=[record_id], _request_timeout=self.timeout)
        except Exception as e:
            logger.error("Error deleting vector %s from %s: %s", record_id, self.index_name, e)
            raise IntegrationError(SERVICE, f"delete {record_id} from {self.index_name} failed: {e}") from e
        logger.info("Deleted vector %s from Pinecone index %s", record_id, self.index_name)

    def delete_by_filter(self, filter: dict[str, Any]) -> None:
        try:
            self.index.delete(filter=filter, _request_timeout=self.timeout)
        except Exception as e:
            logger.error("Error deleting vectors by filter %s from %s: %s", filter, self.index_name, e)
            raise IntegrationError(
                SERVICE, f"delete by filter {filter} from {self.index_name} failed: {e}"
            ) from e
        logger.info("Deleted vectors matching %s from Pinecone index %s", filter, self.index_name)

    def get_stats(self) -> dict[str, int]:
        try:
            stats = self.index.describe_index_stats(_request_timeout=self.timeout)
        except Exception as e:
            logger.error("Error getting stats for Pinecone index %s: %s", self.index_name, e)
            raise IntegrationError(SERVICE, f"stats for {self.index_name} failed: {e}") from e
        return {
            "total_vectors": get_value(stats, "total_vector_count") or 0,
            "dimension": get_value(stats, "dimension") or 0,
        }
