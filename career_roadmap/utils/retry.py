"""Sequential exponential backoff for rate-limited (HTTP 429) calls."""

import asyncio
import random
from typing import Awaitable, Callable, Optional, TypeVar

from career_roadmap.config import (
    RATE_LIMIT_MAX_ATTEMPTS,
    RETRY_INITIAL_DELAY_SECONDS,
    RETRY_JITTER_RATIO,
)
from career_roadmap.errors import RateLimitError
from career_roadmap.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def backoff_delay(attempt: int, initial_delay: float, jitter_ratio: float = RETRY_JITTER_RATIO) -> float:
    """Delay before retry number `attempt` (0-based): initial * 2**attempt plus up to jitter_ratio of it."""
    base = initial_delay * (2 ** attempt)
    if base <= 0:
        return 0.0
    return base + random.uniform(0, base * jitter_ratio)


async def retry_on_rate_limit(
    call: Callable[[], Awaitable[T]],
    is_rate_limited: Callable[[Exception], bool],
    max_attempts: int = RATE_LIMIT_MAX_ATTEMPTS,
    initial_delay: float = RETRY_INITIAL_DELAY_SECONDS,
    label: str = "request",
) -> T:
    """
    Await call(); if it fails with a rate-limit error, wait with exponential backoff and try again.
    Only rate-limit errors are retried; everything else propagates immediately.
    After max_attempts rate-limited attempts, raises RateLimitError.
    """
    attempts = max(1, max_attempts)
    last_error: Optional[Exception] = None
    for attempt in range(attempts):
        try:
            return await call()
        except Exception as e:
            if not is_rate_limited(e):
                raise
            last_error = e
            if attempt + 1 >= attempts:
                break
            delay = backoff_delay(attempt, initial_delay)
            logger.warning(
                "%s rate limited (attempt %s/%s); retrying in %.2fs",
                label,
                attempt + 1,
                attempts,
                delay,
            )
            await asyncio.sleep(delay)

    logger.error("%s still rate limited after %s attempts", label, attempts)
    if isinstance(last_error, RateLimitError):
        raise last_error
    raise RateLimitError() from last_error
