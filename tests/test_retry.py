"""
Retry policy tests.

Module under test: dashboard_access.exception.retry
"""

from __future__ import annotations

import httpx
import pytest

from conftest import status_error
from dashboard_access.exception import (
    ApiError,
    ErrorKind,
    NetworkError,
    RetryContext,
    RetryPolicy,
    ServerError,
    calculate_retry_delay,
    classify,
    with_retry,
)


class _FailingOperation:
    """Fails with the queued errors in order, then succeeds."""

    def __init__(self, *errors: BaseException, result: object = "ok") -> None:
        self.errors = list(errors)
        self.result = result
        self.calls = 0
        self.raised: list[BaseException] = []

    async def __call__(self):
        self.calls += 1
        if self.errors:
            error = self.errors.pop(0)
            self.raised.append(error)
            raise error
        return self.result


class TestRetryContext:
    def test_defaults(self):
        ctx = RetryContext()

        assert ctx.max_attempts == 3
        assert ctx.initial_delay_ms == 1000
        assert ctx.max_delay_ms is None
        assert ctx.jitter is False

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_attempts": 0}, {"initial_delay_ms": -1}, {"max_delay_ms": 0}],
    )
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ValueError):
            RetryContext(**kwargs)

    def test_floor_overrides_caller_predicate(self):
        ctx = RetryContext(should_retry=lambda error: True)

        assert ctx.allows_retry(ServerError(status=500)) is True
        assert ctx.allows_retry(ApiError(status=418)) is True
        for status in (400, 401, 403):
            assert ctx.allows_retry(classify(status_error(status))) is False


class TestCalculateRetryDelay:
    def test_exponential_growth(self):
        ctx = RetryContext(initial_delay_ms=1000)

        assert [calculate_retry_delay(ctx, i) for i in range(4)] == [1.0, 2.0, 4.0, 8.0]

    def test_cap(self):
        ctx = RetryContext(initial_delay_ms=1000, max_delay_ms=3000)

        assert calculate_retry_delay(ctx, 3) == 3.0

    def test_jitter_stays_within_quarter(self):
        ctx = RetryContext(initial_delay_ms=1000, jitter=True)

        for _ in range(50):
            assert 1.5 <= calculate_retry_delay(ctx, 1) <= 2.5


class TestRetryPolicy:
    @pytest.mark.asyncio
    async def test_backoff_schedule(self, fake_sleep):
        operation = _FailingOperation(*(status_error(503) for _ in range(3)))
        policy = RetryPolicy(sleep=fake_sleep)

        result = await policy.execute(operation, RetryContext(max_attempts=4, initial_delay_ms=1000))

        assert result == "ok"
        assert operation.calls == 4
        assert fake_sleep.delays == pytest.approx([1.0, 2.0, 4.0])

    @pytest.mark.asyncio
    async def test_ceiling_raises_last_error(self, fake_sleep):
        errors = [status_error(500), status_error(502), status_error(503)]
        operation = _FailingOperation(*errors, status_error(504))
        policy = RetryPolicy(sleep=fake_sleep)

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await policy.execute(operation, RetryContext(max_attempts=3, initial_delay_ms=10))

        assert operation.calls == 3
        assert exc_info.value is errors[2]
        assert len(fake_sleep.delays) == 2

    @pytest.mark.asyncio
    async def test_last_error_reflects_changed_failure_mode(self, fake_sleep):
        timeout = httpx.ConnectTimeout("timed out", request=httpx.Request("GET", "http://test/"))
        server = status_error(500)
        operation = _FailingOperation(timeout, server)
        policy = RetryPolicy(sleep=fake_sleep)

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await policy.execute(operation, RetryContext(max_attempts=2, initial_delay_ms=0))

        assert exc_info.value is server

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 403])
    async def test_never_retry_classes(self, fake_sleep, status):
        operation = _FailingOperation(status_error(status))
        policy = RetryPolicy(sleep=fake_sleep)
        ctx = RetryContext(max_attempts=10, initial_delay_ms=1, should_retry=lambda error: True)

        with pytest.raises(httpx.HTTPStatusError):
            await policy.execute(operation, ctx)

        assert operation.calls == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_not_found_not_retried_by_default(self, fake_sleep):
        operation = _FailingOperation(status_error(404))

        with pytest.raises(httpx.HTTPStatusError):
            await RetryPolicy(sleep=fake_sleep).execute(operation)

        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_caller_predicate_can_narrow(self, fake_sleep):
        operation = _FailingOperation(status_error(500))
        ctx = RetryContext(should_retry=lambda error: error.kind == ErrorKind.NETWORK)

        with pytest.raises(httpx.HTTPStatusError):
            await RetryPolicy(sleep=fake_sleep).execute(operation, ctx)

        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_on_retry_callback(self, fake_sleep):
        seen: list[tuple[int, ErrorKind]] = []
        operation = _FailingOperation(ConnectionError("down"), status_error(500))

        await RetryPolicy(sleep=fake_sleep).execute(
            operation,
            RetryContext(initial_delay_ms=1),
            on_retry=lambda attempt, error: seen.append((attempt, error.kind)),
        )

        assert seen == [(1, ErrorKind.NETWORK), (2, ErrorKind.SERVER)]

    @pytest.mark.asyncio
    async def test_execute_classified_surfaces_api_error(self, fake_sleep):
        raw = httpx.ConnectError("refused", request=httpx.Request("GET", "http://test/"))
        operation = _FailingOperation(raw)

        with pytest.raises(NetworkError) as exc_info:
            await RetryPolicy(sleep=fake_sleep).execute_classified(
                operation, RetryContext(max_attempts=1)
            )

        assert exc_info.value.status == 0
        assert exc_info.value.__cause__ is raw

    @pytest.mark.asyncio
    async def test_unread_server_response_is_retried_as_server_error(self, fake_sleep):
        def unread_500():
            request = httpx.Request("GET", "http://test/")
            response = httpx.Response(500, stream=httpx.ByteStream(b"{}"), request=request)
            return httpx.HTTPStatusError("server error", request=request, response=response)

        operation = _FailingOperation(unread_500(), unread_500(), unread_500())

        with pytest.raises(ServerError) as exc_info:
            await RetryPolicy(sleep=fake_sleep).execute_classified(
                operation, RetryContext(max_attempts=3, initial_delay_ms=10)
            )

        assert operation.calls == 3
        assert exc_info.value.status == 500
        assert exc_info.value.__cause__ is operation.raised[-1]

    @pytest.mark.asyncio
    async def test_execute_classified_keeps_api_error(self, fake_sleep):
        error = ServerError(status=500)
        operation = _FailingOperation(error)

        with pytest.raises(ServerError) as exc_info:
            await RetryPolicy(sleep=fake_sleep).execute_classified(
                operation, RetryContext(max_attempts=1)
            )

        assert exc_info.value is error


@pytest.mark.asyncio
async def test_with_retry_decorator(fake_sleep) -> None:
    calls = 0

    @with_retry(RetryContext(max_attempts=3, initial_delay_ms=100), policy=RetryPolicy(sleep=fake_sleep))
    async def load_invoices(page: int) -> list[int]:
        nonlocal calls
        calls += 1
        if calls < 3:
            raise status_error(500)
        return [page]

    assert await load_invoices(2) == [2]
    assert calls == 3
    assert fake_sleep.delays == pytest.approx([0.1, 0.2])
    assert load_invoices.__name__ == "load_invoices"
