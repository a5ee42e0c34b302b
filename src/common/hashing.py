"""Hashing utilities."""

import hashlib


def hash_url(url: str) -> str:
    """Return the SHA-256 hex digest of a document URL.

    Used both as the processed-URL cache entry and as the vector record id,
    so re-ingesting the same URL always maps to the same record.
    """
    return hashlib.sha256(url.strip().encode("utf-8")).hexdigest()
