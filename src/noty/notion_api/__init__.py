"""noty.notion_api -- Notion API transport and endpoint wrappers.

This sub-package provides:

* :mod:`.retries` -- Retry classification and exponential backoff.
* :mod:`.transport` -- HTTP transport with auth headers and retries.
* :mod:`.blocks`, :mod:`.pages`, :mod:`.databases` -- content endpoints.
* :mod:`.comments`, :mod:`.users`, :mod:`.search` -- workspace endpoints.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI
from .comments import AsyncCommentAPI
from .databases import AsyncDatabaseAPI
from .pages import AsyncPageAPI
from .retries import RetryPolicy, compute_delay, is_retryable, retry_after_seconds, with_retry
from .search import AsyncSearchAPI
from .transport import AsyncNotionTransport
from .users import AsyncUserAPI

__all__ = [
    "AsyncBlockAPI",
    "AsyncCommentAPI",
    "AsyncDatabaseAPI",
    "AsyncNotionTransport",
    "AsyncPageAPI",
    "AsyncSearchAPI",
    "AsyncUserAPI",
    "RetryPolicy",
    "compute_delay",
    "is_retryable",
    "retry_after_seconds",
    "with_retry",
]
