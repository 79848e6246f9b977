"""Bounded retry with exponential backoff."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .errors import is_retryable

logger = logging.getLogger(__name__)

T = TypeVar("T")


def backoff_delay_ms(attempt: int, retry_base_delay_ms: int) -> int:
    """Delay before retrying after zero-based ``attempt``."""
    return retry_base_delay_ms * 2**attempt


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    context: str,
    max_retries: int = 3,
    retry_base_delay_ms: int = 1000,
) -> T:
    """Run ``operation`` until it succeeds, fails terminally, or attempts run out.

    Only 429 and 5xx failures are retried. ``max_retries`` is the total number
    of attempts; values below 1 still run the operation once. The last error
    is re-raised unchanged.
    """
    attempts = max(1, max_retries)

    for attempt in range(attempts):
        try:
            return await operation()
        except Exception as e:
            if not is_retryable(e) or attempt == attempts - 1:
                raise

            delay_ms = backoff_delay_ms(attempt, retry_base_delay_ms)
            logger.warning(
                "api_retry",
                extra={
                    "context": context,
                    "attempt": attempt + 1,
                    "max_retries": attempts,
                    "delay_ms": delay_ms,
                    "error": str(e),
                },
            )
            await asyncio.sleep(delay_ms / 1000)

    raise AssertionError("unreachable")  # pragma: no cover
