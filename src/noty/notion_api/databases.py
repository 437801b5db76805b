"""Database API wrappers for the Notion API."""

from __future__ import annotations

from typing import Any

from noty.utils.payload import drop_none

from .transport import AsyncNotionTransport


class AsyncDatabaseAPI:
    """Asynchronous wrapper for the Notion Databases API.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def retrieve(self, database_id: str) -> dict[str, Any]:
        """Retrieve a database object, including its property schema."""
        return await self._transport.request("GET", f"/databases/{database_id}")

    async def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        page_size: int | None = None,
        start_cursor: str | None = None,
    ) -> dict[str, Any]:
        """Query one page of database rows.

        Unlike the list helpers this does not auto-paginate: the caller
        gets ``has_more``/``next_cursor`` back and decides whether to
        continue.

        Returns
        -------
        dict
            The raw list response (``results``, ``has_more``,
            ``next_cursor``).
        """
        body = drop_none(
            filter=filter, sorts=sorts, page_size=page_size, start_cursor=start_cursor
        )
        return await self._transport.request(
            "POST", f"/databases/{database_id}/query", json=body
        )
