"""Async HTTP transport for the Notion API.

Each request goes through the following lifecycle:

1. Send the HTTP request with auth and version headers.
2. On ``2xx`` -- return the parsed JSON body.
3. On any other status -- raise the matching :class:`NotyAPIError`
   subclass, keeping status, headers and body.
4. On a transport failure -- raise :class:`NotyNetworkError`.

Steps 1-4 run inside :func:`~noty.notion_api.retries.with_retry`, which
repeats the attempt for 429 and 5xx errors and re-raises the last error
untouched once the configured retries are spent.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TYPE_CHECKING, Any

import httpx

from noty.errors import NotyNetworkError, api_error_from_response
from noty.observability import NoopMetricsHook, get_logger

from .retries import with_retry

if TYPE_CHECKING:
    from noty.config import NotyConfig

log = get_logger("noty.transport")


class AsyncNotionTransport:
    """Asynchronous HTTP transport with auth headers and retries.

    Parameters
    ----------
    config:
        A :class:`~noty.config.NotyConfig` controlling base URL, headers,
        timeouts, retry limits and page size.
    sleep:
        Coroutine function used for backoff waits.
    """

    def __init__(
        self,
        config: NotyConfig,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._config = config
        self._sleep = sleep
        self._policy = config.retry_policy()
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.token}",
                "Notion-Version": config.notion_version,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    # -- public API --------------------------------------------------------

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute an HTTP request against the Notion API.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
        path:
            API path relative to ``base_url`` (e.g. ``/pages``).
        **kwargs:
            Forwarded to :meth:`httpx.AsyncClient.request` (``json=``,
            ``params=``, ...).

        Returns
        -------
        dict
            Parsed JSON response body (``{}`` for empty bodies).

        Raises
        ------
        NotyAPIError
            For non-2xx responses, after retries for 429/5xx.
        NotyNetworkError
            On transport-level failures (not retried).
        """
        return await with_retry(
            lambda: self._send(method, path, **kwargs),
            self._policy,
            sleep=self._sleep,
            on_retry=lambda attempt, delay, exc: self._metrics.increment(
                "noty.retries_total", tags={"method": method, "path": path}
            ),
        )

    async def paginate(self, path: str, **kwargs: Any) -> AsyncIterator[dict]:
        """Auto-paginate a Notion list endpoint, yielding each result item.

        ``GET`` endpoints receive ``page_size``/``start_cursor`` as query
        parameters; ``POST`` endpoints (search, database query) receive
        them in the JSON body.  Iteration stops when ``has_more`` is false
        or no ``next_cursor`` is returned.

        Parameters
        ----------
        path:
            API path to paginate (e.g. ``/blocks/{id}/children``).
        **kwargs:
            ``method`` (default ``GET``) plus anything accepted by
            :meth:`request`.
        """
        method = kwargs.pop("method", "GET")
        cursor: str | None = None

        while True:
            if method.upper() in ("POST", "PATCH"):
                json_body: dict = dict(kwargs.get("json") or {})
                json_body["page_size"] = self._config.page_size
                if cursor is not None:
                    json_body["start_cursor"] = cursor
                kwargs["json"] = json_body
            else:
                params: dict = dict(kwargs.get("params") or {})
                params["page_size"] = self._config.page_size
                if cursor is not None:
                    params["start_cursor"] = cursor
                kwargs["params"] = params

            data = await self.request(method, path, **kwargs)
            for item in data.get("results", []):
                yield item

            if not data.get("has_more", False):
                break
            cursor = data.get("next_cursor")
            if cursor is None:
                break

    async def close(self) -> None:
        """Close the underlying async HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # -- internals ---------------------------------------------------------

    async def _send(self, method: str, path: str, **kwargs: Any) -> dict:
        """One attempt: send, record metrics, decode or raise."""
        t0 = time.monotonic()
        try:
            response = await self._client.request(method, path, **kwargs)
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            self._metrics.increment(
                "noty.requests_total",
                tags={"method": method, "path": path, "status": "error"},
            )
            log.warning(
                "Request network error",
                extra={
                    "extra_fields": {
                        "op": "request",
                        "method": method,
                        "path": path,
                        "error": str(exc),
                    }
                },
            )
            raise NotyNetworkError(
                message=f"Network error on {method} {path}: {exc}",
                context={"method": method, "path": path},
                cause=exc,
            ) from exc

        elapsed_ms = (time.monotonic() - t0) * 1000
        tags = {"method": method, "path": path, "status": str(response.status_code)}
        self._metrics.increment("noty.requests_total", tags=tags)
        self._metrics.timing("noty.request_duration_ms", elapsed_ms, tags=tags)

        if 200 <= response.status_code < 300:
            if response.status_code == 204 or not response.content:
                return {}
            result: dict = response.json()
            return result

        error = api_error_from_response(response, method, path)
        log.warning(
            "Notion API error response",
            extra={
                "extra_fields": {
                    "op": "request",
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "notion_code": error.body.get("code", ""),
                }
            },
        )
        raise error
