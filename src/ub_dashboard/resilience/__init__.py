"""Resilience – retry policies for backend queries."""

from ub_dashboard.resilience.retry import (
    BackoffStrategy,
    ConstantBackoff,
    ExponentialBackoff,
    FullJitter,
    JitterStrategy,
    NoJitter,
    RetryPolicy,
    TenacityRetryPolicy,
)

__all__ = [
    "BackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
    "FullJitter",
    "JitterStrategy",
    "NoJitter",
    "RetryPolicy",
    "TenacityRetryPolicy",
]
