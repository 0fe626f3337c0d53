"""Resilience – TenacityRetryPolicy adapter."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

import tenacity

T = TypeVar("T")


class TenacityRetryPolicy:
    """Retry policy backed by the ``tenacity`` library.

    Exposes the same ``execute_async`` interface as
    :class:`~ub_dashboard.resilience.retry.policy.RetryPolicy`, so it can be
    handed to a table through ``QueryOptions(retry_policy=...)``.

    Parameters
    ----------
    max_attempts:
        Maximum number of call attempts (including the first call).
    wait:
        A ``tenacity`` wait strategy, e.g.
        ``tenacity.wait_exponential(multiplier=1, max=10)``.
        Defaults to ``wait_fixed(1)``.
    retry:
        A ``tenacity`` retry predicate, e.g.
        ``tenacity.retry_if_exception_type(ExternalServiceError)``.
        Defaults to retrying on any exception.

    Example
    -------
    ::

        from tenacity import wait_exponential
        policy = TenacityRetryPolicy(max_attempts=4, wait=wait_exponential(max=8))
        table = TableQueryController(..., query_options=QueryOptions(retry_policy=policy))
    """

    def __init__(
        self,
        max_attempts: int = 3,
        wait: Any = None,
        retry: Any = None,
        **kwargs: Any,
    ) -> None:
        self._max_attempts = max_attempts
        self._wait = wait or tenacity.wait_fixed(1)
        self._retry = retry or tenacity.retry_if_exception_type(Exception)
        self._extra_kwargs = kwargs

    def _build_async_retrying(self) -> tenacity.AsyncRetrying:
        return tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(self._max_attempts),
            wait=self._wait,
            retry=self._retry,
            reraise=True,
            **self._extra_kwargs,
        )

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T:
        """Execute *func* asynchronously with tenacity retry."""
        async for attempt in self._build_async_retrying():
            with attempt:
                result = await func()
        return result  # type: ignore[return-value]


__all__ = ["TenacityRetryPolicy"]
