"""Bounded retry with exponential backoff for external calls."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = 2
    backoff_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    max_backoff_seconds: float = 8.0
    retry_on: tuple[type[BaseException], ...] = (Exception,)

    def delay_for(self, attempt: int) -> float:
        """Delay before the attempt after ``attempt`` (1-based)."""
        delay = self.backoff_seconds * (self.backoff_multiplier ** (attempt - 1))
        return min(delay, self.max_backoff_seconds)


def retry_call(
    func: Callable[..., T],
    *args: Any,
    policy: RetryPolicy | None = None,
    description: str | None = None,
    sleep: Callable[[float], None] = time.sleep,
    **kwargs: Any,
) -> T:
    """Call ``func`` until it succeeds or the policy's attempts are exhausted.

    Exceptions outside ``policy.retry_on`` propagate immediately. After the
    last attempt the most recent exception is re-raised unchanged.

    Args:
        func: Callable to invoke
        *args: Positional arguments for func
        policy: Retry parameters (default: 2 attempts, 0.5s doubling backoff)
        description: Name used in log messages (default: func.__name__)
        sleep: Sleep function, replaceable in tests
        **kwargs: Keyword arguments for func

    Returns:
        Whatever func returns
    """
    policy = policy or RetryPolicy()
    if policy.attempts < 1:
        raise ValueError(f"attempts must be >= 1, got {policy.attempts}")

    name = description or getattr(func, "__name__", "call")

    for attempt in range(1, policy.attempts + 1):
        try:
            return func(*args, **kwargs)
        except policy.retry_on as e:
            if attempt == policy.attempts:
                logger.error("%s failed after %d attempts: %s", name, attempt, e)
                raise
            delay = policy.delay_for(attempt)
            logger.warning(
                "%s attempt %d/%d failed: %s (retrying in %.2fs)",
                name,
                attempt,
                policy.attempts,
                e,
                delay,
            )
            if delay > 0:
                sleep(delay)

    raise AssertionError("unreachable")
