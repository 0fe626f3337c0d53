"""Application table – QueryOptions."""
from __future__ import annotations

import dataclasses
from typing import Any

from ub_dashboard.application.cache import DEFAULT_MAX_ENTRIES
from ub_dashboard.config.settings import TableSettings
from ub_dashboard.resilience.retry import AsyncRetryPolicy, RetryPolicy


@dataclasses.dataclass(frozen=True)
class QueryOptions:
    """Execution controls for a table's query function.

    ``stale_time`` is in seconds: a cached result younger than this is shown
    without calling the query function again.  ``retry`` is the number of
    automatic retries after a failure (``0`` disables retrying) with
    exponential backoff starting at ``retry_delay`` seconds; an explicit
    ``retry_policy`` takes precedence over both.  ``keep_previous_data``
    keeps the rows of the previous parameter set visible while a new one
    loads and when it fails.  ``cache_size`` bounds how many parameter sets
    keep their result cached (least recently used are dropped first).
    """

    enabled: bool = True
    stale_time: float = 0.0
    retry: int = 0
    retry_delay: float = 1.0
    keep_previous_data: bool = False
    retry_policy: AsyncRetryPolicy | None = None
    cache_size: int = DEFAULT_MAX_ENTRIES

    def __post_init__(self) -> None:
        if self.stale_time < 0:
            raise ValueError("stale_time must be >= 0")
        if self.retry < 0:
            raise ValueError("retry must be >= 0")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must be >= 0")
        if self.cache_size < 1:
            raise ValueError("cache_size must be >= 1")

    @classmethod
    def from_settings(cls, settings: TableSettings, **overrides: Any) -> "QueryOptions":
        values: dict[str, Any] = {
            "stale_time": settings.stale_time,
            "retry": settings.retry,
            "retry_delay": settings.retry_delay,
            "keep_previous_data": settings.keep_previous_data,
        }
        values.update(overrides)
        return cls(**values)

    def build_retry_policy(self) -> AsyncRetryPolicy | None:
        if self.retry_policy is not None:
            return self.retry_policy
        if self.retry > 0:
            return RetryPolicy.for_retries(self.retry, base_delay=self.retry_delay)
        return None


__all__ = ["QueryOptions"]
