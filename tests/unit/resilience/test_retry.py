"""Unit tests for retry policies."""
import asyncio
import pytest
import tenacity

from ub_dashboard.kernel.errors import ExternalServiceError
from ub_dashboard.resilience.retry import (
    ConstantBackoff,
    ExponentialBackoff,
    FullJitter,
    NoJitter,
    RetryPolicy,
    TenacityRetryPolicy,
)


class _Flaky:
    def __init__(self, failures, exc=ConnectionError):
        self.calls = 0
        self.failures = failures
        self.exc = exc

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc(f"failure {self.calls}")
        return "ok"


# ---------------------------------------------------------------------------
# Backoff / jitter
# ---------------------------------------------------------------------------

class TestBackoff:
    def test_constant(self):
        backoff = ConstantBackoff(0.5)
        assert backoff.compute(1) == backoff.compute(5) == 0.5

    def test_exponential_starts_at_base(self):
        backoff = ExponentialBackoff(base_delay=1.0)
        assert [backoff.compute(n) for n in (1, 2, 3, 4)] == [1.0, 2.0, 4.0, 8.0]

    def test_exponential_capped(self):
        assert ExponentialBackoff(base_delay=1.0, max_delay=30.0).compute(10) == 30.0


class TestJitter:
    def test_no_jitter(self):
        assert NoJitter().apply(2.0) == 2.0

    def test_full_jitter_in_range(self):
        for _ in range(50):
            assert 0 <= FullJitter().apply(2.0) <= 2.0


# ---------------------------------------------------------------------------
# RetryPolicy
# ---------------------------------------------------------------------------

class TestRetryPolicy:
    def test_max_attempts_must_be_positive(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)

    def test_for_retries_counts_first_attempt(self):
        assert RetryPolicy.for_retries(0).max_attempts == 1
        assert RetryPolicy.for_retries(3).max_attempts == 4

    def test_succeeds_after_failures(self):
        flaky = _Flaky(failures=2)
        policy = RetryPolicy(max_attempts=3, backoff=ConstantBackoff(0))
        assert asyncio.run(policy.execute_async(flaky)) == "ok"
        assert flaky.calls == 3

    def test_reraises_last_error(self):
        flaky = _Flaky(failures=5)
        policy = RetryPolicy(max_attempts=2, backoff=ConstantBackoff(0))
        with pytest.raises(ConnectionError, match="failure 2"):
            asyncio.run(policy.execute_async(flaky))
        assert flaky.calls == 2

    def test_non_retryable_fails_fast(self):
        flaky = _Flaky(failures=5, exc=KeyError)
        policy = RetryPolicy(
            max_attempts=5,
            backoff=ConstantBackoff(0),
            retryable_exceptions=(ExternalServiceError,),
        )
        with pytest.raises(KeyError):
            asyncio.run(policy.execute_async(flaky))
        assert flaky.calls == 1

    def test_for_retries_uses_exponential_backoff(self):
        policy = RetryPolicy.for_retries(2, base_delay=0.5)
        assert isinstance(policy.backoff, ExponentialBackoff)
        assert [policy.backoff.compute(n) for n in (1, 2)] == [0.5, 1.0]
        assert isinstance(policy.jitter, NoJitter)


# ---------------------------------------------------------------------------
# TenacityRetryPolicy
# ---------------------------------------------------------------------------

class TestTenacityRetryPolicy:
    def test_succeeds_after_failures(self):
        flaky = _Flaky(failures=2)
        policy = TenacityRetryPolicy(max_attempts=3, wait=tenacity.wait_none())
        assert asyncio.run(policy.execute_async(flaky)) == "ok"
        assert flaky.calls == 3

    def test_reraises_original_exception(self):
        flaky = _Flaky(failures=5)
        policy = TenacityRetryPolicy(max_attempts=2, wait=tenacity.wait_none())
        with pytest.raises(ConnectionError):
            asyncio.run(policy.execute_async(flaky))
        assert flaky.calls == 2

    def test_retry_predicate(self):
        flaky = _Flaky(failures=5, exc=KeyError)
        policy = TenacityRetryPolicy(
            max_attempts=4,
            wait=tenacity.wait_none(),
            retry=tenacity.retry_if_exception_type(ConnectionError),
        )
        with pytest.raises(KeyError):
            asyncio.run(policy.execute_async(flaky))
        assert flaky.calls == 1
