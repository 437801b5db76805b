"""Block API wrappers for the Notion API.

Provides :class:`AsyncBlockAPI`, a thin wrapper around the Notion
``/blocks`` endpoints.  ``get_children`` auto-paginates and
``append_children`` splits large block lists into API-sized batches.
"""

from __future__ import annotations

from typing import Any

from noty.utils.chunk import chunk_children

from .transport import AsyncNotionTransport

MAX_CHILDREN_PER_REQUEST = 100


def extract_block_ids(response: dict[str, Any]) -> list[str]:
    """Extract block IDs from an ``append_children`` API response.

    Parameters
    ----------
    response:
        The JSON dict returned by ``PATCH /blocks/{id}/children``.

    Returns
    -------
    list[str]
        The ``id`` values of each block in the ``results`` array.
    """
    results = response.get("results", [])
    return [r["id"] for r in results if "id" in r]


class AsyncBlockAPI:
    """Asynchronous wrapper for the Notion Blocks API.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def retrieve(self, block_id: str) -> dict[str, Any]:
        """Retrieve a single block by its ID."""
        return await self._transport.request("GET", f"/blocks/{block_id}")

    async def delete(self, block_id: str) -> dict[str, Any]:
        """Delete (archive) a block and return the archived block object."""
        return await self._transport.request("DELETE", f"/blocks/{block_id}")

    async def get_children(self, block_id: str) -> list[dict[str, Any]]:
        """Retrieve all children of a block, auto-paginating.

        Parameters
        ----------
        block_id:
            The UUID of the parent block (or page).

        Returns
        -------
        list[dict]
            All child block objects in order.
        """
        return [
            block
            async for block in self._transport.paginate(
                f"/blocks/{block_id}/children",
                method="GET",
            )
        ]

    async def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
        after: str | None = None,
        batch_size: int = MAX_CHILDREN_PER_REQUEST,
    ) -> list[dict[str, Any]]:
        """Append child blocks to a parent block or page.

        Parameters
        ----------
        block_id:
            The UUID of the parent block (or page) to append to.
        children:
            Block objects to append.  Lists longer than *batch_size* are
            sent as several sequential requests, preserving order.
        after:
            Optional UUID of an existing child block.  The new children are
            inserted immediately after it; later batches follow the last
            block created by the previous batch.
        batch_size:
            Maximum number of blocks per request.

        Returns
        -------
        list[dict]
            The block objects reported by every append response, in order.
        """
        appended: list[dict[str, Any]] = []
        for batch in chunk_children(children, batch_size):
            body: dict[str, Any] = {"children": batch}
            if after is not None:
                body["after"] = after
            response = await self._transport.request(
                "PATCH", f"/blocks/{block_id}/children", json=body
            )
            appended.extend(response.get("results", []))
            if after is not None:
                ids = extract_block_ids(response)
                if ids:
                    after = ids[-1]
        return appended
