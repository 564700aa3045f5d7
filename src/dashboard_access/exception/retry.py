# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""
Retry and backoff policy.

Exponential backoff over a fixed attempt budget. Only failures the context
allows are retried, and validation/auth failures never are, whatever the
caller's predicate says.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import wraps
from typing import ParamSpec, Protocol, TypeVar

from dashboard_access.exception.base import ApiError
from dashboard_access.exception.classifier import ErrorClassifier
from dashboard_access.exception.policy import NEVER_RETRY_KINDS, default_should_retry

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

ShouldRetry = Callable[[ApiError], bool]
Sleep = Callable[[float], Awaitable[object]]


class RetryConfigLike(Protocol):
    """Config protocol accepted by RetryContext.from_config."""

    max_attempts: int
    initial_delay_ms: int
    max_delay_ms: int | None
    jitter: bool


@dataclass(frozen=True)
class RetryContext:
    """
    Retry settings for one call site.

    Attempts are 0-indexed and max_attempts counts every try, the first one
    included.
    """

    max_attempts: int = 3
    initial_delay_ms: int = 1000
    should_retry: ShouldRetry = default_should_retry
    max_delay_ms: int | None = None
    jitter: bool = False

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.initial_delay_ms < 0:
            raise ValueError(f"initial_delay_ms must be >= 0, got {self.initial_delay_ms}")
        if self.max_delay_ms is not None and self.max_delay_ms <= 0:
            raise ValueError(f"max_delay_ms must be > 0, got {self.max_delay_ms}")

    @classmethod
    def from_config(
        cls,
        config: RetryConfigLike,
        should_retry: ShouldRetry | None = None,
    ) -> RetryContext:
        return cls(
            max_attempts=config.max_attempts,
            initial_delay_ms=config.initial_delay_ms,
            should_retry=should_retry or default_should_retry,
            max_delay_ms=config.max_delay_ms,
            jitter=config.jitter,
        )

    def allows_retry(self, error: ApiError) -> bool:
        """Caller predicate AND-ed with the never-retry floor."""
        if error.kind in NEVER_RETRY_KINDS:
            return False
        return bool(self.should_retry(error))


def calculate_retry_delay(context: RetryContext, attempt: int) -> float:
    """
    Delay (seconds) after the failed attempt with 0-based index `attempt`.

    initial_delay_ms * 2**attempt, optionally capped and jittered.
    """
    delay_ms = float(context.initial_delay_ms * (2**attempt))
    if context.max_delay_ms is not None:
        delay_ms = min(delay_ms, context.max_delay_ms)

    if context.jitter:
        jitter_range = delay_ms * 0.25
        delay_ms += random.uniform(-jitter_range, jitter_range)

    return max(delay_ms / 1000.0, 0.0)


class RetryPolicy:
    """Runs async operations under a RetryContext."""

    def __init__(
        self,
        *,
        sleep: Sleep = asyncio.sleep,
        default_context: RetryContext | None = None,
    ) -> None:
        self._sleep = sleep
        self.default_context = default_context or RetryContext()

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        context: RetryContext | None = None,
        *,
        on_retry: Callable[[int, ApiError], None] | None = None,
    ) -> T:
        """
        Run `operation` until it succeeds, fails with a non-retryable error,
        or the attempt budget is spent.

        The raw error of the last attempt is re-raised unchanged.
        """
        ctx = context or self.default_context
        name = getattr(operation, "__name__", "operation")

        for attempt in range(ctx.max_attempts):
            try:
                return await operation()
            except Exception as e:
                api_error = ErrorClassifier.classify(e)

                if not ctx.allows_retry(api_error):
                    logger.warning(
                        f"[Retry] Non-retryable error, failing fast | op={name} | "
                        f"kind={api_error.kind.value} | status={api_error.status}"
                    )
                    raise

                if attempt + 1 >= ctx.max_attempts:
                    logger.error(
                        f"[Retry] Retries exhausted | op={name} | "
                        f"attempts={attempt + 1} | kind={api_error.kind.value} | error={e}"
                    )
                    raise

                delay = calculate_retry_delay(ctx, attempt)
                logger.warning(
                    f"[Retry] Attempt {attempt + 1}/{ctx.max_attempts} failed, "
                    f"retrying in {delay:.2f}s | op={name} | kind={api_error.kind.value}"
                )

                if on_retry:
                    on_retry(attempt + 1, api_error)

                await self._sleep(delay)

        raise RuntimeError("Retry exhausted unexpectedly")

    async def execute_classified(
        self,
        operation: Callable[[], Awaitable[T]],
        context: RetryContext | None = None,
        *,
        on_retry: Callable[[int, ApiError], None] | None = None,
    ) -> T:
        """execute() whose failures always surface as ApiError."""
        try:
            return await self.execute(operation, context, on_retry=on_retry)
        except ApiError:
            raise
        except Exception as e:
            raise ErrorClassifier.classify(e) from e


def with_retry(
    context: RetryContext | None = None,
    policy: RetryPolicy | None = None,
    on_retry: Callable[[int, ApiError], None] | None = None,
):
    """
    Async retry decorator.

    Example:
    ```python
    @with_retry(RetryContext(max_attempts=5, initial_delay_ms=200))
    async def load_invoices():
        ...
    ```
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            runner = policy or RetryPolicy()

            async def call() -> T:
                return await func(*args, **kwargs)

            call.__name__ = func.__name__
            return await runner.execute(call, context, on_retry=on_retry)

        return wrapper

    return decorator
