"""Tests for common.serialization module."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from common.models import Document
from common.serialization import serialize_dataclass


class Color(Enum):
    RED = "red"


@dataclass
class SampleData:
    name: str
    value: int


@dataclass
class SampleWithDatetime:
    name: str
    created_at: datetime


@dataclass
class SampleWithNesting:
    name: str
    metadata: dict = field(default_factory=dict)
    events: list = field(default_factory=list)


class TestSerializeDataclass:
    def test_basic_dataclass_to_dict(self) -> None:
        assert serialize_dataclass(SampleData(name="test", value=42)) == {"name": "test", "value": 42}

    def test_datetime_field_to_iso_string(self) -> None:
        dt = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        result = serialize_dataclass(SampleWithDatetime(name="test", created_at=dt))
        assert result["created_at"] == "2024-01-01T12:00:00+00:00"

    def test_nested_values_converted(self) -> None:
        dt = datetime(2024, 6, 15, 8, 30, 0, tzinfo=timezone.utc)
        obj = SampleWithNesting(
            name="test",
            metadata={"updated_at": dt, "inner": {"color": Color.RED}},
            events=[dt, ("a", Color.RED)],
        )
        result = serialize_dataclass(obj)
        assert result["metadata"] == {"updated_at": "2024-06-15T08:30:00+00:00", "inner": {"color": "red"}}
        assert result["events"] == ["2024-06-15T08:30:00+00:00", ["a", "red"]]

    def test_document_serializes_all_fields(self) -> None:
        document = Document(
            title="Title",
            url="https://example.com/a",
            published_at="2024-01-01T00:00:00Z",
            source_name="Wire",
        )
        assert serialize_dataclass(document) == {
            "title": "Title",
            "url": "https://example.com/a",
            "published_at": "2024-01-01T00:00:00Z",
            "source_name": "Wire",
            "description": None,
            "content": None,
            "author": None,
        }
