"""Metrics hook protocol and no-op default implementation.

The transport emits counters and timings around every API request.  By
default a :class:`NoopMetricsHook` is used; callers can pass any object
satisfying :class:`MetricsHook` as ``NotyConfig(metrics=...)`` to route the
data points to StatsD, Prometheus or similar.

Emitted metric names:

* ``noty.requests_total``       -- counter, tagged ``method``/``path``/``status``
* ``noty.request_duration_ms``  -- timing, same tags
* ``noty.retries_total``        -- counter, tagged ``method``/``path``
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy."""

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that discards every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
