"""CLI for embedding a staged news batch."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from embed_news.embed_news import process_batch
from embed_news.helpers import parse_embed_news_args
from embed_news.models import EmbedSettings
from providers.factory import build_blob_store, build_embedder, build_vector_index

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_embed_news_args(argv)
    config = load_config(args.config)

    if args.local_dir:
        config.storage.backend = "local"
        config.storage.local_path = args.local_dir

    result = process_batch(
        args.batch_key,
        blob_store=build_blob_store(config),
        embedder=build_embedder(config),
        vector_index=build_vector_index(config),
        settings=EmbedSettings.from_config(config.embedding, config.retry.to_policy()),
    )
    logger.info(
        "Embedded %d/%d articles from %s (%d failed, %d skipped)",
        result.processed,
        result.total,
        result.batch_key,
        result.failed,
        result.skipped,
    )


if __name__ == "__main__":
    main()
