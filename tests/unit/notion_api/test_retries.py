"""Tests for noty.notion_api.retries."""

from __future__ import annotations

import pytest

from noty.errors import NotyNetworkError, NotyNotFoundError, NotyRateLimitError, NotyServerError
from noty.notion_api.retries import (
    RetryPolicy,
    compute_delay,
    is_retryable,
    retry_after_seconds,
    with_retry,
)


class StatusError(Exception):
    def __init__(self, status, headers=None):
        super().__init__(f"status {status}")
        self.status = status
        self.headers = headers or {}


class FakeSleep:
    """Records requested delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def failing_then(result, errors):
    """An operation factory raising *errors* in turn, then returning *result*."""
    calls = {"n": 0}

    async def operation():
        calls["n"] += 1
        if errors:
            raise errors.pop(0)
        return result

    return operation, calls


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

class TestIsRetryable:
    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504, 599])
    def test_transient(self, status):
        assert is_retryable(StatusError(status))

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 499])
    def test_permanent(self, status):
        assert not is_retryable(StatusError(status))

    def test_no_status(self):
        assert not is_retryable(ValueError("x"))

    def test_status_code_attribute(self):
        err = Exception()
        err.status_code = 503
        assert is_retryable(err)

    def test_non_integer_status_ignored(self):
        assert not is_retryable(StatusError("500"))

    def test_bool_status_ignored(self):
        assert not is_retryable(StatusError(True))

    def test_noty_errors(self):
        assert is_retryable(NotyRateLimitError("x", status=429))
        assert is_retryable(NotyServerError("x", status=502))
        assert not is_retryable(NotyNotFoundError("x", status=404))
        assert not is_retryable(NotyNetworkError("x"))


class TestRetryAfter:
    def test_numeric(self):
        assert retry_after_seconds(StatusError(429, {"retry-after": "5"})) == 5.0

    def test_fractional(self):
        assert retry_after_seconds(StatusError(429, {"retry-after": "0.25"})) == 0.25

    @pytest.mark.parametrize("value", ["soon", "-1", "", "nan", "inf"])
    def test_unusable_values(self, value):
        assert retry_after_seconds(StatusError(429, {"retry-after": value})) is None

    def test_missing(self):
        assert retry_after_seconds(StatusError(429)) is None
        assert retry_after_seconds(ValueError()) is None


class TestComputeDelay:
    def test_exponential(self):
        assert [compute_delay(n) for n in range(4)] == [1.0, 2.0, 4.0, 8.0]

    def test_capped(self):
        assert compute_delay(10) == 30.0

    def test_retry_after_wins(self):
        assert compute_delay(0, retry_after=7.0) == 7.0

    def test_retry_after_capped(self):
        assert compute_delay(0, maximum=5.0, retry_after=60.0) == 5.0

    def test_custom_base(self):
        assert compute_delay(2, base=0.5) == 2.0


# ---------------------------------------------------------------------------
# with_retry
# ---------------------------------------------------------------------------

class TestWithRetry:
    @pytest.mark.asyncio
    async def test_success_first_try(self):
        sleep = FakeSleep()
        operation, calls = failing_then("ok", [])
        assert await with_retry(operation, sleep=sleep) == "ok"
        assert calls["n"] == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_two_rate_limits_then_success(self):
        sleep = FakeSleep()
        operation, calls = failing_then("ok", [StatusError(429), StatusError(429)])
        assert await with_retry(operation, RetryPolicy(), sleep=sleep) == "ok"
        assert calls["n"] == 3
        assert sleep.delays == [1.0, 2.0]
        assert sum(sleep.delays) == compute_delay(0) + compute_delay(1)

    @pytest.mark.asyncio
    async def test_not_found_not_retried(self):
        sleep = FakeSleep()
        error = StatusError(404)
        operation, calls = failing_then("ok", [error])
        with pytest.raises(StatusError) as exc_info:
            await with_retry(operation, sleep=sleep)
        assert exc_info.value is error
        assert calls["n"] == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_exhaustion_reraises_last_error_unchanged(self):
        sleep = FakeSleep()
        errors = [StatusError(500), StatusError(502), StatusError(503)]
        last = errors[-1]
        operation, calls = failing_then("ok", errors)
        with pytest.raises(StatusError) as exc_info:
            await with_retry(operation, RetryPolicy(max_retries=2), sleep=sleep)
        assert exc_info.value is last
        assert calls["n"] == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_zero_retries(self):
        operation, calls = failing_then("ok", [StatusError(503)])
        with pytest.raises(StatusError):
            await with_retry(operation, RetryPolicy(max_retries=0), sleep=FakeSleep())
        assert calls["n"] == 1

    @pytest.mark.asyncio
    async def test_retry_after_header_used(self):
        sleep = FakeSleep()
        operation, _ = failing_then("ok", [StatusError(429, {"retry-after": "3"})])
        await with_retry(operation, sleep=sleep)
        assert sleep.delays == [3.0]

    @pytest.mark.asyncio
    async def test_non_finite_retry_after_falls_back_to_backoff(self):
        sleep = FakeSleep()
        operation, _ = failing_then("ok", [StatusError(429, {"retry-after": "nan"})])
        await with_retry(operation, sleep=sleep)
        assert sleep.delays == [1.0]

    @pytest.mark.asyncio
    async def test_delays_capped(self):
        sleep = FakeSleep()
        errors = [StatusError(500) for _ in range(3)]
        operation, _ = failing_then("ok", errors)
        policy = RetryPolicy(max_retries=3, base_delay=10.0, max_delay=15.0)
        await with_retry(operation, policy, sleep=sleep)
        assert sleep.delays == [10.0, 15.0, 15.0]

    @pytest.mark.asyncio
    async def test_on_retry_callback(self):
        seen = []
        operation, _ = failing_then("ok", [StatusError(429), StatusError(500)])
        await with_retry(
            operation,
            sleep=FakeSleep(),
            on_retry=lambda attempt, delay, exc: seen.append((attempt, delay, exc.status)),
        )
        assert seen == [(1, 1.0, 429), (2, 2.0, 500)]

    @pytest.mark.asyncio
    async def test_exception_without_status_propagates(self):
        operation, calls = failing_then("ok", [KeyError("k")])
        with pytest.raises(KeyError):
            await with_retry(operation, sleep=FakeSleep())
        assert calls["n"] == 1
