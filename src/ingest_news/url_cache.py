"""Processed-URL cache: hashes of URLs that have already been staged."""

from __future__ import annotations

import logging
from typing import Iterable

from common.errors import BlobNotFoundError
from common.hashing import hash_url
from common.models import Document
from providers.base import BlobStore

logger = logging.getLogger(__name__)

CACHE_KEY = "processed-urls-cache.json"
DEFAULT_MAX_SIZE = 10_000


class ProcessedUrlCache:
    """Ordered set of URL hashes, oldest first, capped at ``max_size``."""

    def __init__(self, hashes: Iterable[str] = (), max_size: int = DEFAULT_MAX_SIZE) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self.max_size = max_size
        # dict keeps insertion order and gives O(1) membership
        self._hashes: dict[str, None] = {}
        self.add(hashes)

    def __len__(self) -> int:
        return len(self._hashes)

    def __contains__(self, url_hash: str) -> bool:
        return url_hash in self._hashes

    @property
    def hashes(self) -> list[str]:
        return list(self._hashes)

    def add(self, hashes: Iterable[str]) -> None:
        """Append hashes as most recent, then drop the oldest beyond the cap."""
        for url_hash in hashes:
            self._hashes.pop(url_hash, None)
            self._hashes[url_hash] = None
        overflow = len(self._hashes) - self.max_size
        if overflow > 0:
            for url_hash in list(self._hashes)[:overflow]:
                del self._hashes[url_hash]

    def partition(self, documents: list[Document]) -> tuple[list[Document], list[Document]]:
        """Split documents into (new, duplicate). Repeats within the list count as duplicates."""
        new: list[Document] = []
        duplicates: list[Document] = []
        seen: set[str] = set()
        for document in documents:
            url_hash = hash_url(document.url)
            if url_hash in self._hashes or url_hash in seen:
                duplicates.append(document)
            else:
                seen.add(url_hash)
                new.append(document)
        return new, duplicates

    @classmethod
    def load(
        cls, blob_store: BlobStore, max_size: int = DEFAULT_MAX_SIZE, key: str = CACHE_KEY
    ) -> "ProcessedUrlCache":
        """Load the cache. A missing or unreadable cache is treated as empty."""
        try:
            data = blob_store.get_json(key)
        except BlobNotFoundError:
            logger.info("No processed-URL cache at %s, starting empty", key)
            return cls(max_size=max_size)
        except Exception as e:
            logger.warning("Could not load processed-URL cache %s, starting empty: %s", key, e)
            return cls(max_size=max_size)

        if not isinstance(data, list):
            logger.warning("Processed-URL cache %s is not a list, starting empty", key)
            return cls(max_size=max_size)

        cache = cls((h for h in data if isinstance(h, str)), max_size=max_size)
        logger.info("Loaded processed-URL cache with %d entries", len(cache))
        return cache

    def save(self, blob_store: BlobStore, key: str = CACHE_KEY) -> None:
        blob_store.put_json(key, self.hashes)
        logger.info("Saved processed-URL cache with %d entries", len(self))
