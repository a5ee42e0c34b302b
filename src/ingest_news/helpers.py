"""Helper functions for ingest_news CLI."""

from __future__ import annotations

import argparse

from pydantic import ValidationError as PydanticValidationError

from common.cli_helpers import format_validation_error, positive_int
from ingest_news.models import IngestRequest


def parse_ingest_news_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for ingest_news. Unset values fall back to config.

    Values given on the command line go through the same checks as the
    scheduler payload (``IngestRequest``).
    """

    parser = argparse.ArgumentParser(description="Fetch news for a topic and stage new articles")
    parser.add_argument("--topic", default=None, help="Search topic (default: from config)")
    parser.add_argument("--page", type=positive_int, default=None, help="Result page (default: from config)")
    parser.add_argument("--page-size", type=positive_int, default=None, help="Articles per page (default: from config)")
    parser.add_argument(
        "--headlines",
        action="store_true",
        help="Fetch top headlines matching the topic instead of searching all articles",
    )
    parser.add_argument("--config", default=None, help="Config name or path (default: $PIPELINE_CONFIG or prod)")
    parser.add_argument("--local-dir", default=None, help="Stage to a local directory instead of S3")
    args = parser.parse_args(argv)

    given = {name: getattr(args, name) for name in ("topic", "page", "page_size") if getattr(args, name) is not None}
    try:
        IngestRequest.model_validate(given)
    except PydanticValidationError as e:
        parser.error(format_validation_error(e))
    return args
