"""NewsAPI.org document source."""

import logging
from typing import Any, Optional

import requests

from common.errors import IntegrationError, ValidationError
from common.models import Document

logger = logging.getLogger(__name__)

SERVICE = "news-api"


class NewsApiSource:
    """Fetches articles from the NewsAPI ``/everything`` and ``/top-headlines`` endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://newsapi.org/v2",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise IntegrationError(SERVICE, "News API key is not set")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, endpoint: str, params: dict[str, Any]) -> dict:
        query = {k: v for k, v in params.items() if v is not None}
        try:
            response = self.session.get(
                f"{self.base_url}{endpoint}",
                params=query,
                headers={"X-Api-Key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Request to NewsAPI %s failed: %s", endpoint, e)
            raise IntegrationError(SERVICE, f"request to {endpoint} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("NewsAPI %s returned non-JSON body (status=%s)", endpoint, response.status_code)
            raise IntegrationError(SERVICE, f"invalid JSON from {endpoint}, status={response.status_code}") from e

        if not response.ok or data.get("status") != "ok":
            logger.error(
                "Error fetching from NewsAPI endpoint %s: status=%s code=%s message=%s",
                endpoint,
                response.status_code,
                data.get("code"),
                data.get("message"),
            )
            raise IntegrationError(
                SERVICE,
                f"status={response.status_code}, code={data.get('code')}, "
                f"endpoint={endpoint}: {data.get('message')}",
            )
        return data

    def _to_documents(self, data: dict) -> list[Document]:
        documents = []
        for raw in data.get("articles") or []:
            try:
                documents.append(Document.from_dict(raw))
            except ValidationError as e:
                logger.warning("Skipping malformed NewsAPI article: %s", e)
        return documents

    def search_news(
        self, topic: str, page: int = 1, page_size: int = 10, sort_by: str = "relevancy"
    ) -> list[Document]:
        """Search all articles matching ``topic``."""
        data = self._request(
            "/everything",
            {"q": topic, "page": page, "pageSize": page_size, "sortBy": sort_by},
        )
        documents = self._to_documents(data)
        logger.info(
            "Fetched %d articles for %r (totalResults=%s)",
            len(documents),
            topic,
            data.get("totalResults"),
        )
        return documents

    def get_top_headlines(
        self,
        country: Optional[str] = None,
        category: Optional[str] = None,
        query: Optional[str] = None,
        page_size: int = 20,
        page: int = 1,
    ) -> list[Document]:
        """Fetch top headlines, optionally filtered by country, category or keyword."""
        data = self._request(
            "/top-headlines",
            {"country": country, "category": category, "q": query, "pageSize": page_size, "page": page},
        )
        return self._to_documents(data)
