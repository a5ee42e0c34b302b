"""In-memory vector index using cosine similarity."""

import logging
from typing import Any, Optional

import numpy as np

from common.errors import ValidationError
from common.models import SearchResult, VectorRecord

logger = logging.getLogger(__name__)


def _matches(metadata: dict[str, Any], filter: dict[str, Any]) -> bool:
    return all(metadata.get(key) == value for key, value in filter.items())


class InMemoryVectorIndex:
    """Vector index held in a dict; for local runs and tests."""

    def __init__(self, dimension: int) -> None:
        self.dimension = dimension
        self._records: dict[str, VectorRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def upsert(self, records: list[VectorRecord]) -> None:
        for record in records:
            if len(record.values) != self.dimension:
                raise ValidationError(
                    f"Vector {record.id} has dimension {len(record.values)}, index expects {self.dimension}"
                )
            self._records[record.id] = record
        logger.info("Upserted %d vectors (index size: %d)", len(records), len(self._records))

    def search(
        self,
        vector: list[float],
        top_k: int,
        include_metadata: bool = True,
        filter: Optional[dict[str, Any]] = None,
    ) -> list[SearchResult]:
        candidates = [
            r for r in self._records.values() if not filter or _matches(r.metadata, filter)
        ]
        if not candidates or top_k < 1:
            return []

        query = np.asarray(vector, dtype=float)
        matrix = np.asarray([r.values for r in candidates], dtype=float)
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        scores = np.divide(matrix @ query, norms, out=np.zeros(len(candidates)), where=norms > 0)

        order = np.argsort(-scores)[:top_k]
        return [
            SearchResult(
                id=candidates[i].id,
                score=float(scores[i]),
                metadata=dict(candidates[i].metadata) if include_metadata else {},
            )
            for i in order
        ]

    def delete_by_id(self, record_id: str) -> None:
        self._records.pop(record_id, None)

    def delete_by_filter(self, filter: dict[str, Any]) -> None:
        for record_id in [k for k, r in self._records.items() if _matches(r.metadata, filter)]:
            del self._records[record_id]

    def get_stats(self) -> dict[str, int]:
        return {"total_vectors": len(self._records), "dimension": self.dimension}
