"""Retry controller - bounded retries with exponential backoff.

Attempt schedule for ``max_retries=3, base_delay=1.0``: call, sleep 1s, call,
sleep 2s, call, sleep 4s, call. No sleep follows the final failed attempt; the
last observed error is raised.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryStrategy:
    """Configurable async retry logic with exponential backoff."""

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        exponential_backoff: bool = True,
        retryable_exceptions: tuple[type[BaseException], ...] | None = None,
    ) -> None:
        """
        Initialize retry strategy.

        Args:
            max_retries: Retries after the first attempt (total attempts = max_retries + 1)
            base_delay: Base delay between attempts in seconds
            exponential_backoff: Whether to double the delay after each attempt
            retryable_exceptions: Exception types to retry on (None = all)
        """
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.exponential_backoff = exponential_backoff
        self.retryable_exceptions = retryable_exceptions or (Exception,)

    async def execute(
        self,
        func: Callable[[], Awaitable[T]],
        on_retry: Callable[[int, Exception], None] | None = None,
    ) -> T:
        """
        Execute an async function with retries.

        Args:
            func: Zero-argument coroutine function, called once per attempt
            on_retry: Optional callback called before each retry with (attempt, exception)

        Returns:
            Result of the first successful attempt

        Raises:
            Last exception if all attempts fail
        """
        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1):
            try:
                return await func()
            except self.retryable_exceptions as e:
                last_exception = e

                if attempt == self.max_retries:
                    break

                delay = self.calculate_delay(attempt)
                logger.warning(
                    "Attempt %d/%d failed (%s), retrying in %.2fs",
                    attempt + 1,
                    self.max_retries + 1,
                    e,
                    delay,
                    extra={"attempt": attempt + 1},
                )
                if on_retry:
                    on_retry(attempt + 1, e)

                await asyncio.sleep(delay)

        logger.error("All %d attempts failed: %s", self.max_retries + 1, last_exception)
        assert last_exception is not None
        raise last_exception

    def calculate_delay(self, attempt: int) -> float:
        """Delay before attempt ``attempt + 1`` (0-based)."""
        if self.exponential_backoff:
            return self.base_delay * (2 ** attempt)
        return self.base_delay


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    base_delay: float = 1.0,
) -> T:
    """
    Await ``fn`` with up to ``max_retries`` retries and exponential backoff.

    Usage:
        envelope = await with_retry(lambda: client.get("/teams"), max_retries=2)
    """
    return await RetryStrategy(max_retries=max_retries, base_delay=base_delay).execute(fn)
