"""Request entry point for generate_newsletter. Always returns a structured result."""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from common.cli_helpers import format_validation_error, setup_logging
from common.config import get_config
from generate_newsletter.generate_newsletter import NewsletterGenerator
from generate_newsletter.helpers import build_newsletter_settings
from generate_newsletter.models import NewsletterRequest, NewsletterResponse
from providers.factory import build_deliverer, build_embedder, build_generator, build_vector_index

setup_logging()
logger = logging.getLogger(__name__)


def handler(event: dict[str, Any] | None, context: Any = None) -> dict:
    payload = dict(event or {})
    try:
        config = get_config()
    except Exception as e:
        logger.exception("Failed to load pipeline config")
        return NewsletterResponse(success=False, message=f"Fatal error: {e}", email_sent=False).to_payload()

    if "maxArticles" not in payload and "max_articles" not in payload:
        payload["maxArticles"] = config.newsletter.default_max_articles

    try:
        request = NewsletterRequest.model_validate(payload)
    except PydanticValidationError as e:
        logger.warning("Invalid newsletter request: %s", e)
        return NewsletterResponse(
            success=False,
            message=f"Invalid request: {format_validation_error(e)}",
            email_sent=False,
        ).to_payload()

    logger.info("Initializing newsletter generation: topic=%r recipients=%d", request.topic, len(request.recipients))
    try:
        generator = NewsletterGenerator(
            embedder=build_embedder(config),
            vector_index=build_vector_index(config),
            generator=build_generator(config),
            deliverer=build_deliverer(config),
            settings=build_newsletter_settings(config),
        )
    except Exception as e:
        logger.exception("Failed to initialize newsletter clients")
        return NewsletterResponse(success=False, message=f"Fatal error: {e}", email_sent=False).to_payload()

    response = generator.generate(request)
    logger.info(
        "Newsletter generation completed: success=%s articles_found=%s email_sent=%s",
        response.success,
        response.articles_found,
        response.email_sent,
    )
    return response.to_payload()
