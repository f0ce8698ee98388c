"""Tests for retry with exponential backoff."""

from __future__ import annotations

import pytest

from pastelize._retry import RetryPolicy, calculate_delay, with_retry
from pastelize.errors import ClientRequestError, RateLimitError, ServerError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Flaky:
    """Callable that raises the queued errors, then returns "ok"."""

    def __init__(self, *errors: Exception) -> None:
        self.errors = list(errors)
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


def _policy(sleeps: list[float], **kwargs) -> RetryPolicy:
    kwargs.setdefault("jitter", False)
    return RetryPolicy(sleep=sleeps.append, **kwargs)


# ---------------------------------------------------------------------------
# calculate_delay
# ---------------------------------------------------------------------------


class TestCalculateDelay:
    def test_exponential(self) -> None:
        policy = RetryPolicy(base_delay=1.0, backoff_multiplier=2.0, jitter=False)
        assert [calculate_delay(n, policy) for n in range(4)] == [1.0, 2.0, 4.0, 8.0]

    def test_clamped_to_max_delay(self) -> None:
        policy = RetryPolicy(base_delay=10.0, max_delay=15.0, jitter=False)
        assert calculate_delay(3, policy) == 15.0

    def test_jitter_range(self) -> None:
        policy = RetryPolicy(base_delay=2.0, jitter=True)
        for _ in range(20):
            assert 1.0 <= calculate_delay(0, policy) <= 3.0


# ---------------------------------------------------------------------------
# with_retry
# ---------------------------------------------------------------------------


class TestWithRetry:
    def test_success_first_try(self) -> None:
        sleeps: list[float] = []
        fn = Flaky()
        assert with_retry(fn, _policy(sleeps)) == "ok"
        assert fn.calls == 1
        assert sleeps == []

    def test_retryable_errors_are_retried(self) -> None:
        sleeps: list[float] = []
        fn = Flaky(ServerError("busy"), ServerError("busy"))
        assert with_retry(fn, _policy(sleeps, max_retries=2)) == "ok"
        assert fn.calls == 3
        assert sleeps == [1.0, 2.0]

    def test_gives_up_after_max_retries(self) -> None:
        sleeps: list[float] = []
        fn = Flaky(ServerError("one"), ServerError("two"), ServerError("three"))
        with pytest.raises(ServerError, match="two"):
            with_retry(fn, _policy(sleeps, max_retries=1))
        assert fn.calls == 2

    def test_non_retryable_errors_propagate(self) -> None:
        fn = Flaky(ClientRequestError("bad", status_code=400))
        with pytest.raises(ClientRequestError):
            with_retry(fn, _policy([]))
        assert fn.calls == 1

    def test_plain_exceptions_are_not_retried(self) -> None:
        fn = Flaky(ValueError("nope"))
        with pytest.raises(ValueError):
            with_retry(fn, _policy([]))
        assert fn.calls == 1

    def test_retry_after_is_honored(self) -> None:
        sleeps: list[float] = []
        fn = Flaky(RateLimitError("slow", retry_after=4.0))
        assert with_retry(fn, _policy(sleeps)) == "ok"
        assert sleeps == [4.0]

    def test_retry_after_beyond_max_delay_raises(self) -> None:
        sleeps: list[float] = []
        fn = Flaky(RateLimitError("slow", retry_after=120.0))
        with pytest.raises(RateLimitError):
            with_retry(fn, _policy(sleeps, max_delay=30.0))
        assert sleeps == []
