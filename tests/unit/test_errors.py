"""Tests for the noty error hierarchy."""

from __future__ import annotations

import httpx
import pytest

from noty.errors import (
    ErrorCode,
    NotyAPIError,
    NotyAuthError,
    NotyConfigError,
    NotyConflictError,
    NotyError,
    NotyNetworkError,
    NotyNotFoundError,
    NotyPermissionError,
    NotyRateLimitError,
    NotyServerError,
    NotyValidationError,
    api_error_from_response,
)


def _response(status, body=None, headers=None, content=None):
    if content is None:
        resp = httpx.Response(status, json=body if body is not None else {}, headers=headers)
    else:
        resp = httpx.Response(status, content=content, headers=headers)
    resp.request = httpx.Request("GET", "https://api.notion.com/v1/x")
    return resp


class TestNotyError:
    def test_fields(self):
        cause = ValueError("root")
        err = NotyError(ErrorCode.NOT_FOUND, "missing", {"id": "x"}, cause)
        assert err.code == ErrorCode.NOT_FOUND
        assert err.message == "missing"
        assert err.context == {"id": "x"}
        assert err.__cause__ is cause
        assert str(err) == "missing"

    def test_repr(self):
        assert repr(NotyError("C", "m")) == "NotyError(code='C', message='m')"

    def test_config_error_code(self):
        assert NotyConfigError("bad").code == ErrorCode.CONFIG_ERROR

    def test_network_error_has_no_status(self):
        err = NotyNetworkError("down")
        assert err.code == ErrorCode.NETWORK_ERROR
        assert not hasattr(err, "status")


class TestAPIError:
    def test_headers_lowercased(self):
        err = NotyRateLimitError("x", status=429, headers={"Retry-After": "2"})
        assert err.headers == {"retry-after": "2"}
        assert err.status_code == 429

    def test_all_api_errors_are_noty_errors(self):
        assert issubclass(NotyServerError, NotyAPIError)
        assert issubclass(NotyAPIError, NotyError)


class TestFromResponse:
    @pytest.mark.parametrize(
        "status,cls,code",
        [
            (400, NotyValidationError, ErrorCode.VALIDATION_ERROR),
            (401, NotyAuthError, ErrorCode.AUTH_ERROR),
            (403, NotyPermissionError, ErrorCode.PERMISSION_ERROR),
            (404, NotyNotFoundError, ErrorCode.NOT_FOUND),
            (409, NotyConflictError, ErrorCode.CONFLICT),
            (418, NotyValidationError, ErrorCode.VALIDATION_ERROR),
            (429, NotyRateLimitError, ErrorCode.RATE_LIMITED),
            (500, NotyServerError, ErrorCode.SERVER_ERROR),
            (504, NotyServerError, ErrorCode.SERVER_ERROR),
        ],
    )
    def test_status_mapping(self, status, cls, code):
        err = api_error_from_response(_response(status, {"code": "c"}), "GET", "/x")
        assert type(err) is cls
        assert err.code == code
        assert err.status == status

    def test_message_and_context(self):
        body = {"object": "error", "code": "validation_error", "message": "Title is too long"}
        err = api_error_from_response(_response(400, body), "POST", "/pages")
        assert err.message == "POST /pages failed with 400: Title is too long"
        assert err.context == {
            "status_code": 400,
            "notion_code": "validation_error",
            "method": "POST",
            "path": "/pages",
        }
        assert err.body == body

    def test_non_json_body_uses_text(self):
        err = api_error_from_response(_response(502, content=b"Bad Gateway"), "GET", "/x")
        assert err.body == {}
        assert err.message.endswith("Bad Gateway")

    def test_headers_kept(self):
        resp = _response(429, {}, headers={"Retry-After": "7"})
        assert api_error_from_response(resp, "GET", "/x").headers["retry-after"] == "7"
