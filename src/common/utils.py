"""Common utility functions."""

from typing import Any


def get_value(obj: Any, key: str) -> Any:
    """Get value from dict or object attribute."""
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def truncate(text: str | None, limit: int) -> str:
    """Return at most ``limit`` characters of ``text`` (empty for None)."""
    if not text:
        return ""
    return text[:limit]
