"""Client configuration for noty.

:class:`NotyConfig` is a plain dataclass that captures every tuneable knob
of :class:`noty.client.NotyClient`.  Only ``token`` is required to talk to
the API; the conversion functions need no configuration at all.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any

from noty.errors import NotyConfigError
from noty.notion_api.retries import RetryPolicy

TOKEN_ENV_VAR = "NOTION_TOKEN"
"""Environment variable read by :meth:`NotyConfig.from_env`."""


@dataclass
class NotyConfig:
    """Complete configuration for a noty client.

    Parameters
    ----------
    token:
        Notion integration token.  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    retry_max_retries:
        Retries after the first attempt for 429 and 5xx responses.
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on any single backoff delay, including a
        server-supplied ``Retry-After``.
    page_size:
        Page size requested from list endpoints.
    max_batch_size:
        Maximum number of blocks sent in a single create/append request.
    metrics:
        Optional :class:`~noty.observability.MetricsHook` implementation.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    notion_version: str = "2022-06-28"

    base_url: str = "https://api.notion.com/v1"

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Retry ───────────────────────────────────────────────────────────
    retry_max_retries: int = 3

    retry_base_delay: float = 1.0

    retry_max_delay: float = 30.0

    # ── Pagination & batching ──────────────────────────────────────────
    page_size: int = 100

    max_batch_size: int = 100

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )

        if self.retry_max_retries < 0:
            raise ValueError(f"retry_max_retries must be >= 0, got {self.retry_max_retries}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if not 1 <= self.page_size <= 100:
            raise ValueError(f"page_size must be between 1 and 100, got {self.page_size}")
        if not 1 <= self.max_batch_size <= 100:
            raise ValueError(
                f"max_batch_size must be between 1 and 100, got {self.max_batch_size}"
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> NotyConfig:
        """Build a config whose token comes from ``$NOTION_TOKEN``.

        Raises
        ------
        NotyConfigError
            If the variable is unset or empty and no ``token`` override
            was given.
        """
        token = overrides.pop("token", None) or os.environ.get(TOKEN_ENV_VAR, "")
        if not token:
            raise NotyConfigError(
                f"{TOKEN_ENV_VAR} environment variable is not set",
                context={"env_var": TOKEN_ENV_VAR},
            )
        return cls(token=token, **overrides)

    def retry_policy(self) -> RetryPolicy:
        """The :class:`RetryPolicy` described by the ``retry_*`` fields."""
        return RetryPolicy(
            max_retries=self.retry_max_retries,
            base_delay=self.retry_base_delay,
            max_delay=self.retry_max_delay,
        )

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"NotyConfig({', '.join(parts)})"
