"""HTTP adapter – RetryingHttpClient."""
from __future__ import annotations

from typing import Any

import httpx

from ub_dashboard.kernel.errors import ExternalServiceError, TimeoutError as AppTimeoutError
from ub_dashboard.resilience.retry import ExponentialBackoff, FullJitter, RetryPolicy
from ub_dashboard.adapters.http.client import HttpxHttpClient


class RetryingHttpClient(HttpxHttpClient):
    """HTTP client with automatic retry on transient failures."""

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        max_attempts: int = 3,
        base_delay: float = 0.1,
        **kwargs: Any,
    ) -> None:
        super().__init__(base_url, timeout, **kwargs)
        self._retry = RetryPolicy(
            max_attempts=max_attempts,
            backoff=ExponentialBackoff(base_delay=base_delay),
            jitter=FullJitter(),
            retryable_exceptions=(ExternalServiceError, AppTimeoutError),
        )

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        return await self._retry.execute_async(
            lambda: super(RetryingHttpClient, self)._request(method, url, **kwargs)
        )


__all__ = ["RetryingHttpClient"]
