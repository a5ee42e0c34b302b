"""Tests for providers.news_api module."""

from unittest.mock import MagicMock

import pytest
import requests

from common.errors import IntegrationError
from providers.news_api import NewsApiSource


def _response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload
    return response


ARTICLE = {
    "source": {"id": None, "name": "TechCrunch"},
    "author": "Sam",
    "title": "New model released",
    "description": "A lab released a model.",
    "url": "https://techcrunch.com/model",
    "publishedAt": "2024-05-01T10:00:00Z",
    "content": "Body",
}


class TestNewsApiSource:
    def test_missing_api_key_raises(self) -> None:
        with pytest.raises(IntegrationError):
            NewsApiSource("")

    def test_search_news_requests_everything_endpoint(self) -> None:
        session = MagicMock()
        session.get.return_value = _response({"status": "ok", "totalResults": 1, "articles": [ARTICLE]})
        source = NewsApiSource("key", session=session, timeout=7)

        documents = source.search_news("AI", page=2, page_size=5)

        assert [d.url for d in documents] == ["https://techcrunch.com/model"]
        assert documents[0].source_name == "TechCrunch"
        session.get.assert_called_once_with(
            "https://newsapi.org/v2/everything",
            params={"q": "AI", "page": 2, "pageSize": 5, "sortBy": "relevancy"},
            headers={"X-Api-Key": "key"},
            timeout=7,
        )

    def test_malformed_articles_skipped(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(
            {"status": "ok", "articles": [ARTICLE, {"title": "no url"}, "garbage"]}
        )
        documents = NewsApiSource("key", session=session).search_news("AI")
        assert len(documents) == 1

    def test_error_status_raises(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(
            {"status": "error", "code": "apiKeyInvalid", "message": "Your API key is invalid"},
            status_code=401,
        )
        with pytest.raises(IntegrationError, match="apiKeyInvalid"):
            NewsApiSource("key", session=session).search_news("AI")

    def test_ok_http_with_error_body_raises(self) -> None:
        session = MagicMock()
        session.get.return_value = _response({"status": "error", "code": "rateLimited"})
        with pytest.raises(IntegrationError):
            NewsApiSource("key", session=session).search_news("AI")

    def test_request_exception_wrapped(self) -> None:
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(IntegrationError, match="unreachable"):
            NewsApiSource("key", session=session).search_news("AI")

    def test_non_json_body_raises(self) -> None:
        session = MagicMock()
        response = _response(None, status_code=502)
        response.json.side_effect = ValueError("no json")
        session.get.return_value = response
        with pytest.raises(IntegrationError, match="invalid JSON"):
            NewsApiSource("key", session=session).search_news("AI")

    def test_top_headlines_drops_unset_params(self) -> None:
        session = MagicMock()
        session.get.return_value = _response({"status": "ok", "articles": [ARTICLE]})

        documents = NewsApiSource("key", session=session).get_top_headlines(country="us")

        assert len(documents) == 1
        _, kwargs = session.get.call_args
        assert kwargs["params"] == {"country": "us", "pageSize": 20, "page": 1}
