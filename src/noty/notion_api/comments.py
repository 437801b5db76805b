"""Comment API wrappers for the Notion API."""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


class AsyncCommentAPI:
    """Asynchronous wrapper for the Notion Comments API.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def list(self, block_id: str) -> list[dict[str, Any]]:
        """Return every comment on a page or block, auto-paginating."""
        return [
            comment
            async for comment in self._transport.paginate(
                "/comments",
                method="GET",
                params={"block_id": block_id},
            )
        ]

    async def create(
        self,
        page_id: str,
        rich_text: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Add a top-level comment to a page.

        Parameters
        ----------
        page_id:
            The UUID of the page to comment on.
        rich_text:
            Comment body as a Notion rich_text array.
        """
        body = {"parent": {"page_id": page_id}, "rich_text": rich_text}
        return await self._transport.request("POST", "/comments", json=body)
