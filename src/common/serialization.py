"""Serialization helpers for blobs written to storage and handler results."""

from dataclasses import asdict
from datetime import datetime
from enum import Enum
from typing import Any


def _to_json_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    return value


def serialize_dataclass(obj) -> dict:
    """Serialize a dataclass to a JSON-ready dict.

    Datetimes become ISO strings and enums their values, at any depth.
    """
    return _to_json_value(asdict(obj))
