"""noty -- Notion client with Markdown import and export.

Public re-exports
-----------------

* **Client:** :class:`NotyClient`
* **Configuration:** :class:`NotyConfig`
* **Conversion:** :func:`markdown_to_blocks`, :func:`blocks_to_markdown`,
  :func:`tokenize` and friends
* **Helpers:** :func:`normalize_id`, :func:`flatten_properties`
* **Errors:** Every :class:`NotyError` subclass and :class:`ErrorCode`
* **Models:** All result dataclasses and conversion types

Usage::

    from noty import markdown_to_blocks, blocks_to_markdown_sync

    blocks = markdown_to_blocks("# Title\\n\\nSome **bold** text")
    assert blocks_to_markdown_sync(blocks) == "# Title\\nSome **bold** text"
"""

from __future__ import annotations

# ── Client ─────────────────────────────────────────────────────────────
from noty.client import NotyClient

# ── Configuration ───────────────────────────────────────────────────────
from noty.config import NotyConfig

# ── Conversion ──────────────────────────────────────────────────────────
from noty.converter import (
    MarkdownToNotionConverter,
    NotionToMarkdownRenderer,
    blocks_to_markdown,
    blocks_to_markdown_sync,
    build_rich_text,
    markdown_to_blocks,
    render_rich_text,
    render_spans,
    spans_from_rich_text,
    tokenize,
)

# ── Errors ──────────────────────────────────────────────────────────────
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
)

# ── Helpers ─────────────────────────────────────────────────────────────
from noty.ids import normalize_id, to_uuid

# ── Models ──────────────────────────────────────────────────────────────
from noty.models import (
    AuthInfo,
    BlockType,
    Comment,
    CommentAuthor,
    DatabaseResult,
    InlineSpan,
    PageResult,
    QueryResult,
    SearchResult,
    User,
)
from noty.notion_api.retries import RetryPolicy, with_retry
from noty.properties import flatten_properties

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Client
    "NotyClient",
    # Configuration
    "NotyConfig",
    "RetryPolicy",
    # Conversion
    "MarkdownToNotionConverter",
    "NotionToMarkdownRenderer",
    "blocks_to_markdown",
    "blocks_to_markdown_sync",
    "build_rich_text",
    "markdown_to_blocks",
    "render_rich_text",
    "render_spans",
    "spans_from_rich_text",
    "tokenize",
    # Helpers
    "flatten_properties",
    "normalize_id",
    "to_uuid",
    "with_retry",
    # Error base + code enum
    "NotyError",
    "ErrorCode",
    "NotyConfigError",
    "NotyNetworkError",
    # API errors
    "NotyAPIError",
    "NotyValidationError",
    "NotyAuthError",
    "NotyPermissionError",
    "NotyNotFoundError",
    "NotyConflictError",
    "NotyRateLimitError",
    "NotyServerError",
    # Models
    "AuthInfo",
    "BlockType",
    "Comment",
    "CommentAuthor",
    "DatabaseResult",
    "InlineSpan",
    "PageResult",
    "QueryResult",
    "SearchResult",
    "User",
]
