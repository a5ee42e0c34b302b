"""CLI for generating and sending a newsletter."""

from __future__ import annotations

import json
import logging
import sys

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from generate_newsletter.generate_newsletter import NewsletterGenerator
from generate_newsletter.helpers import build_newsletter_settings, parse_generate_newsletter_args
from generate_newsletter.models import NewsletterRequest
from providers.factory import build_deliverer, build_embedder, build_generator, build_vector_index

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_generate_newsletter_args(argv)
    config = load_config(args.config)

    request = NewsletterRequest(
        topic=args.topic,
        recipients=args.recipients,
        max_articles=args.max_articles or config.newsletter.default_max_articles,
    )
    generator = NewsletterGenerator(
        embedder=build_embedder(config),
        vector_index=build_vector_index(config),
        generator=build_generator(config),
        deliverer=build_deliverer(config),
        settings=build_newsletter_settings(config),
    )
    response = generator.generate(request)

    print(json.dumps(response.to_payload(), indent=2))
    if not response.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
