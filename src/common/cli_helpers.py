"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging
import os

from pydantic import ValidationError as PydanticValidationError


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging format for CLI tools and handlers."""
    logging.basicConfig(
        level=(level or os.environ.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def parse_recipients(value: str) -> list[str]:
    """Parse a comma-separated recipient list for argparse arguments.

    Raises:
        argparse.ArgumentTypeError: If no recipient is given.
    """
    recipients = [part.strip() for part in value.split(",") if part.strip()]
    if not recipients:
        raise argparse.ArgumentTypeError("at least one recipient is required")
    return recipients


def positive_int(value: str) -> int:
    """argparse type for integers >= 1."""
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value!r} must be >= 1")
    return number


def format_validation_error(error: PydanticValidationError) -> str:
    """One-line summary of a pydantic error, e.g. ``maxArticles: Input should be ...``."""
    return "; ".join(
        f"{'.'.join(str(part) for part in e['loc']) or 'request'}: {e['msg']}" for e in error.errors()
    )
