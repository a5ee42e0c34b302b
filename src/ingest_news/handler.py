"""Scheduled-trigger entry point for ingest_news."""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from common.cli_helpers import setup_logging
from common.config import IngestConfig, get_config
from common.errors import ValidationError
from common.serialization import serialize_dataclass
from ingest_news.ingest_news import ingest_news
from ingest_news.models import IngestRequest
from providers.factory import build_blob_store, build_document_source

setup_logging()
logger = logging.getLogger(__name__)


def parse_event(event: dict[str, Any] | None, defaults: IngestConfig) -> IngestRequest:
    """Validate the trigger payload; fields it omits come from config."""
    payload = {k: v for k, v in (event or {}).items() if v is not None}
    try:
        request = IngestRequest.model_validate(payload)
    except PydanticValidationError as e:
        logger.error("Invalid ingestion payload %s: %s", event, e)
        raise ValidationError(f"Invalid ingestion payload: {e}") from e

    updates = {
        name: getattr(defaults, name)
        for name in ("topic", "page", "page_size")
        if name not in request.model_fields_set
    }
    return request.model_copy(update=updates)


def handler(event: dict[str, Any] | None, context: Any = None) -> dict:
    """Run one ingestion. Errors propagate so the scheduler can retry."""
    config = get_config()
    request = parse_event(event, config.ingest)

    logger.info("Fetch news event received: %s", request.model_dump(by_alias=True))
    result = ingest_news(
        topic=request.topic,
        page=request.page,
        page_size=request.page_size,
        source=build_document_source(config),
        blob_store=build_blob_store(config),
        cache_max_size=config.ingest.cache_max_size,
        headlines=request.headlines,
    )
    return serialize_dataclass(result)
