"""CLI for fetching and staging news articles."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from ingest_news.helpers import parse_ingest_news_args
from ingest_news.ingest_news import ingest_news
from providers.factory import build_blob_store, build_document_source

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_ingest_news_args(argv)
    config = load_config(args.config)

    if args.local_dir:
        config.storage.backend = "local"
        config.storage.local_path = args.local_dir

    result = ingest_news(
        topic=args.topic or config.ingest.topic,
        page=args.page or config.ingest.page,
        page_size=args.page_size or config.ingest.page_size,
        source=build_document_source(config),
        blob_store=build_blob_store(config),
        cache_max_size=config.ingest.cache_max_size,
        headlines=args.headlines,
    )

    if result.batch_key is None:
        logger.warning("No new articles staged")
        return
    logger.info("Staged %d new articles to %s", result.new, result.batch_key)


if __name__ == "__main__":
    main()
