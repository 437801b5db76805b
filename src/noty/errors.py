"""Error hierarchy for the noty client.

Every error raised by the client inherits from :class:`NotyError`.  Each
carries a machine-readable ``code`` (from :class:`ErrorCode`), a
human-readable ``message``, an optional structured ``context`` dict, and an
optional ``cause`` (chained exception).

HTTP error responses are raised as :class:`NotyAPIError` subclasses that
keep the original ``status``, ``headers`` and ``body`` of the response, so
the retry policy in :mod:`noty.notion_api.retries` can classify them and
callers can inspect them after retries are exhausted.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import httpx

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the client can raise."""

    CONFIG_ERROR = "CONFIG_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NotyError(Exception):
    """Base exception for all noty errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` identifying the error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class NotyConfigError(NotyError):
    """The client was constructed with an unusable configuration."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(code=ErrorCode.CONFIG_ERROR, message=message, context=context)


class NotyNetworkError(NotyError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Network errors carry no status code and are therefore never retried by
    :func:`noty.notion_api.retries.with_retry`.

    Context keys: ``method``, ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# API errors
# ---------------------------------------------------------------------------

class NotyAPIError(NotyError):
    """The Notion API answered with a non-2xx status.

    Attributes
    ----------
    status:
        The HTTP status code.
    headers:
        Response headers with lower-cased names (``retry-after`` etc.).
    body:
        The decoded JSON error body, or ``{}`` when it was not JSON.
    """

    default_code: str = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        status: int,
        headers: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.status: int = status
        self.headers: dict[str, str] = {k.lower(): v for k, v in (headers or {}).items()}
        self.body: dict[str, Any] = body or {}
        ctx = {"status_code": status, "notion_code": self.body.get("code", "")}
        ctx.update(context or {})
        super().__init__(code=self.default_code, message=message, context=ctx)

    @property
    def status_code(self) -> int:
        return self.status


class NotyValidationError(NotyAPIError):
    """400, or any other non-retryable 4xx without a dedicated class."""

    default_code = ErrorCode.VALIDATION_ERROR


class NotyAuthError(NotyAPIError):
    """401: the integration token is invalid or expired."""

    default_code = ErrorCode.AUTH_ERROR


class NotyPermissionError(NotyAPIError):
    """403: the integration lacks access to the resource."""

    default_code = ErrorCode.PERMISSION_ERROR


class NotyNotFoundError(NotyAPIError):
    """404: the resource does not exist or is not shared with the integration."""

    default_code = ErrorCode.NOT_FOUND


class NotyConflictError(NotyAPIError):
    """409: the resource was modified concurrently."""

    default_code = ErrorCode.CONFLICT


class NotyRateLimitError(NotyAPIError):
    """429: rate limit exceeded.  Retryable."""

    default_code = ErrorCode.RATE_LIMITED


class NotyServerError(NotyAPIError):
    """5xx: the API failed on its side.  Retryable."""

    default_code = ErrorCode.SERVER_ERROR


_STATUS_ERRORS: dict[int, type[NotyAPIError]] = {
    400: NotyValidationError,
    401: NotyAuthError,
    403: NotyPermissionError,
    404: NotyNotFoundError,
    409: NotyConflictError,
    429: NotyRateLimitError,
}


def api_error_from_response(
    response: httpx.Response,
    method: str,
    path: str,
) -> NotyAPIError:
    """Build the :class:`NotyAPIError` subclass matching *response*."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    notion_message = body.get("message") or response.text[:500]

    if status >= 500:
        error_cls: type[NotyAPIError] = NotyServerError
    else:
        error_cls = _STATUS_ERRORS.get(status, NotyValidationError)

    return error_cls(
        message=f"{method} {path} failed with {status}: {notion_message}",
        status=status,
        headers=dict(response.headers),
        body=body,
        context={"method": method, "path": path},
    )
