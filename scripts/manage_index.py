"""Create, inspect or prune the vector index used by the pipeline."""

from __future__ import annotations

import argparse
import json
import logging

from dotenv import load_dotenv


def _parse_filter(value: str) -> dict:
    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"filter must be a JSON object: {e}") from e
    if not isinstance(data, dict) or not data:
        raise argparse.ArgumentTypeError("filter must be a non-empty JSON object")
    return data


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the news vector index.")
    parser.add_argument("--config", default=None, help="Config name or path (default: $PIPELINE_CONFIG or prod)")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("create", help="Create the index if it does not exist")
    commands.add_parser("stats", help="Print vector count and dimension")

    delete_id = commands.add_parser("delete-id", help="Delete one vector by id")
    delete_id.add_argument("record_id", help="Vector id (SHA-256 of the article URL)")

    delete_filter = commands.add_parser("delete-filter", help="Delete vectors matching a metadata filter")
    delete_filter.add_argument("filter", type=_parse_filter, help='JSON object, e.g. \'{"source": "Reuters"}\'')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    logger = logging.getLogger(__name__)

    load_dotenv()

    from common.config import load_config
    from providers.factory import build_vector_index

    config = load_config(args.config)
    index = build_vector_index(config)

    if args.command == "create":
        if not hasattr(index, "ensure_index"):
            raise SystemExit(f"Backend {config.vector_index.backend!r} does not need to be created")
        settings = config.vector_index
        created = index.ensure_index(
            dimension=config.embedding.dimension,
            metric=settings.metric,
            cloud=settings.cloud,
            region=settings.region,
        )
        logger.info("Index %s %s", settings.index_name, "created" if created else "already exists")
    elif args.command == "stats":
        print(json.dumps(index.get_stats(), indent=2))
    elif args.command == "delete-id":
        index.delete_by_id(args.record_id)
    elif args.command == "delete-filter":
        index.delete_by_filter(args.filter)


if __name__ == "__main__":
    main()
