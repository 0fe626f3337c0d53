"""Resilience – retry with configurable backoff and jitter strategies."""
from ub_dashboard.resilience.retry.backoff import BackoffStrategy, ConstantBackoff, ExponentialBackoff
from ub_dashboard.resilience.retry.jitter import FullJitter, JitterStrategy, NoJitter
from ub_dashboard.resilience.retry.policy import AsyncRetryPolicy, RetryPolicy
from ub_dashboard.resilience.retry.tenacity_adapter import TenacityRetryPolicy

__all__ = [
    "AsyncRetryPolicy", "BackoffStrategy", "ConstantBackoff", "ExponentialBackoff",
    "FullJitter", "JitterStrategy", "NoJitter", "RetryPolicy", "TenacityRetryPolicy",
]
