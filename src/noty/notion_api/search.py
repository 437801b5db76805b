"""Search API wrapper for the Notion API."""

from __future__ import annotations

from typing import Any

from noty.utils.payload import drop_none

from .transport import AsyncNotionTransport


class AsyncSearchAPI:
    """Asynchronous wrapper for ``POST /search``.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def search(
        self,
        query: str = "",
        filter: dict[str, Any] | None = None,
        sort: dict[str, Any] | None = None,
        page_size: int = 10,
    ) -> dict[str, Any]:
        """Search pages and databases shared with the integration.

        Parameters
        ----------
        query:
            Text matched against titles.  Empty matches everything.
        filter:
            Optional filter, e.g. ``{"property": "object", "value": "page"}``.
        sort:
            Optional sort, e.g. ``{"direction": "descending",
            "timestamp": "last_edited_time"}``.
        page_size:
            Maximum number of results to return.

        Returns
        -------
        dict
            The raw list response.
        """
        body = drop_none(query=query, page_size=page_size, filter=filter, sort=sort)
        return await self._transport.request("POST", "/search", json=body)
