"""Helper functions for generate_newsletter."""

from __future__ import annotations

import argparse

from pydantic import ValidationError as PydanticValidationError

from common.cli_helpers import format_validation_error, parse_recipients, positive_int
from common.config import PipelineConfig
from generate_newsletter.models import NewsletterRequest, NewsletterSettings


def build_newsletter_settings(config: PipelineConfig) -> NewsletterSettings:
    return NewsletterSettings(
        max_tokens=config.generation.max_tokens,
        parse_retries=config.generation.parse_retries,
        retry=config.retry.to_policy(),
    )


def parse_generate_newsletter_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for generate_newsletter, validated like a handler request."""

    parser = argparse.ArgumentParser(description="Generate a newsletter from indexed news and email it")
    parser.add_argument("--topic", required=True, help="Newsletter topic")
    parser.add_argument(
        "--recipients",
        type=parse_recipients,
        required=True,
        help="Comma-separated recipient addresses",
    )
    parser.add_argument(
        "--max-articles",
        type=positive_int,
        default=None,
        help="Number of articles to retrieve (default: from config)",
    )
    parser.add_argument("--config", default=None, help="Config name or path (default: $PIPELINE_CONFIG or prod)")
    args = parser.parse_args(argv)

    given = {"topic": args.topic, "recipients": args.recipients}
    if args.max_articles is not None:
        given["max_articles"] = args.max_articles
    try:
        request = NewsletterRequest.model_validate(given)
    except PydanticValidationError as e:
        parser.error(format_validation_error(e))
    args.topic = request.topic
    args.recipients = request.recipients
    return args
