"""Retry classification and exponential backoff.

This module provides the pieces the transport layer composes:

* :func:`is_retryable` -- decide whether a failure is transient.
* :func:`retry_after_seconds` -- read a server-supplied ``Retry-After``.
* :func:`compute_delay` -- compute the delay before the next attempt.
* :func:`with_retry` -- run a coroutine factory under a :class:`RetryPolicy`.

Only failures carrying a numeric status of ``429`` or ``>= 500`` are
transient.  Everything else, including exceptions with no status at all,
propagates on the first attempt.  When retries run out the last exception
is re-raised unchanged.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from noty.observability import get_logger

log = get_logger("noty.retries")

T = TypeVar("T")

_RATE_LIMITED = 429


@dataclass(frozen=True)
class RetryPolicy:
    """Retry limits for one wrapped call.

    Attributes
    ----------
    max_retries:
        Retries allowed after the first attempt.
    base_delay:
        Base delay in seconds; attempt ``n`` waits ``base_delay * 2**n``.
    max_delay:
        Cap in seconds applied to every delay, including ``Retry-After``.
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0


def _status_of(exc: BaseException) -> int | None:
    for attr in ("status", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def is_retryable(exc: BaseException) -> bool:
    """Return ``True`` if *exc* carries a 429 or 5xx status."""
    status = _status_of(exc)
    if status is None:
        return False
    return status == _RATE_LIMITED or status >= 500


def retry_after_seconds(exc: BaseException) -> float | None:
    """Extract a ``retry-after`` header from *exc* as seconds, or ``None``."""
    headers = getattr(exc, "headers", None)
    if not headers:
        return None
    try:
        raw = headers.get("retry-after")
    except AttributeError:
        return None
    if raw is None:
        return None
    try:
        seconds = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


def compute_delay(
    attempt: int,
    base: float = 1.0,
    maximum: float = 30.0,
    retry_after: float | None = None,
) -> float:
    """Compute the delay in seconds before retry number *attempt* (0-indexed).

    A server-provided *retry_after* takes precedence over exponential
    backoff.  Either way the result is capped at *maximum*.  No jitter.
    """
    if retry_after is not None:
        delay = retry_after
    else:
        delay = base * (2 ** attempt)
    return min(delay, maximum)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    *,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    on_retry: Callable[[int, float, Exception], None] | None = None,
) -> T:
    """Await ``operation()`` and retry it on transient failures.

    Parameters
    ----------
    operation:
        Zero-argument callable returning a fresh awaitable on every call.
    policy:
        Retry limits.  Defaults to ``RetryPolicy()``.
    sleep:
        Coroutine function used to wait between attempts.  Injected by
        tests to observe delays without real waiting.
    on_retry:
        Optional callback invoked as ``on_retry(attempt, delay, exc)``
        before each wait, with *attempt* counting from 1.

    Returns
    -------
    T
        The result of the first successful attempt.

    Raises
    ------
    BaseException
        The first non-retryable exception, or the last retryable one once
        ``policy.max_retries`` retries have been spent.  Always the
        original object, never wrapped.
    """
    if policy is None:
        policy = RetryPolicy()

    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            if attempt >= policy.max_retries or not is_retryable(exc):
                raise

            delay = compute_delay(
                attempt,
                base=policy.base_delay,
                maximum=policy.max_delay,
                retry_after=retry_after_seconds(exc),
            )
            log.warning(
                "Transient failure, retrying",
                extra={
                    "extra_fields": {
                        "op": "retry",
                        "status_code": _status_of(exc),
                        "attempt": attempt + 1,
                        "max_retries": policy.max_retries,
                        "delay_seconds": delay,
                    }
                },
            )
            if on_retry is not None:
                on_retry(attempt + 1, delay, exc)
            await sleep(delay)
            attempt += 1
