"""Tests for common.models module."""

import pytest

from common.errors import ValidationError
from common.models import Document, VectorRecord


class TestDocumentFromDict:
    def test_parses_news_api_article(self) -> None:
        raw = {
            "source": {"id": "reuters", "name": "Reuters"},
            "author": "A. Writer",
            "title": "Chips rally",
            "description": "Semiconductor stocks rose.",
            "url": "https://reuters.com/chips",
            "publishedAt": "2024-05-01T10:00:00Z",
            "content": "Full text",
        }
        document = Document.from_dict(raw)
        assert document.source_name == "Reuters"
        assert document.published_at == "2024-05-01T10:00:00Z"
        assert document.author == "A. Writer"

    def test_parses_staged_record(self) -> None:
        staged = {
            "title": "Chips rally",
            "url": "https://reuters.com/chips",
            "published_at": "2024-05-01T10:00:00Z",
            "source_name": "Reuters",
        }
        document = Document.from_dict(staged)
        assert document.to_dict()["source_name"] == "Reuters"
        assert document.description is None

    def test_missing_source_defaults_to_unknown(self) -> None:
        document = Document.from_dict({"title": "T", "url": "https://example.com"})
        assert document.source_name == "Unknown"
        assert document.published_at == ""

    def test_missing_url_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Document.from_dict({"title": "T"})

    def test_missing_title_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Document.from_dict({"url": "https://example.com"})

    def test_non_dict_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Document.from_dict(["not", "an", "article"])


class TestVectorRecord:
    def test_to_dict(self) -> None:
        record = VectorRecord(id="abc", values=[0.1, 0.2], metadata={"title": "T"})
        assert record.to_dict() == {"id": "abc", "values": [0.1, 0.2], "metadata": {"title": "T"}}
