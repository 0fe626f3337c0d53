"""Resilience – RetryPolicy."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Protocol, TypeVar

from ub_dashboard.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff
from ub_dashboard.resilience.retry.jitter import JitterStrategy, NoJitter

T = TypeVar("T")
logger = logging.getLogger(__name__)


class AsyncRetryPolicy(Protocol):
    """Anything that can run a coroutine factory with retries."""

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T: ...


class RetryPolicy:
    """Configurable retry policy.

    ``max_attempts`` counts the first call, so ``RetryPolicy(max_attempts=1)``
    never retries.  A table configured with ``retry=2`` uses
    ``RetryPolicy(max_attempts=3)``.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        backoff: BackoffStrategy | None = None,
        jitter: JitterStrategy | None = None,
        retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.backoff = backoff or ExponentialBackoff()
        self.jitter = jitter or NoJitter()
        self.retryable_exceptions = retryable_exceptions

    @classmethod
    def for_retries(cls, retries: int, base_delay: float = 1.0) -> "RetryPolicy":
        """Policy performing *retries* extra attempts with exponential backoff."""
        return cls(
            max_attempts=retries + 1,
            backoff=ExponentialBackoff(base_delay=base_delay),
        )

    def _should_retry(self, exc: Exception) -> bool:
        return isinstance(exc, self.retryable_exceptions)

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T:
        """Execute *func* asynchronously with retry."""
        last_exc: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await func()
            except Exception as exc:
                if not self._should_retry(exc) or attempt == self.max_attempts:
                    raise
                last_exc = exc
                delay = self.jitter.apply(self.backoff.compute(attempt))
                logger.debug("retry attempt=%d delay=%.2fs exc=%r", attempt, delay, exc)
                await asyncio.sleep(delay)
        raise last_exc  # type: ignore[misc]


__all__ = ["AsyncRetryPolicy", "RetryPolicy"]
