"""``/pages`` endpoint wrapper.

Responses are returned as raw dicts; :mod:`noty.client` flattens them into
:class:`~noty.models.PageResult`.
"""

from __future__ import annotations

from typing import Any

from noty.utils.payload import drop_none

from .transport import AsyncNotionTransport

JSONDict = dict[str, Any]


class AsyncPageAPI:
    """Create, read and update pages.

    Parameters
    ----------
    transport:
        The shared :class:`AsyncNotionTransport`.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def create(
        self,
        parent: JSONDict,
        properties: JSONDict,
        children: list[JSONDict] | None = None,
    ) -> JSONDict:
        """``POST /pages``.

        *parent* is ``{"page_id": ...}`` or ``{"database_id": ...}``;
        *properties* must already be in wire format.  At most 100
        *children* may be sent; an empty list is omitted.
        """
        payload = drop_none(parent=parent, properties=properties, children=children or None)
        return await self._transport.request("POST", "/pages", json=payload)

    async def retrieve(self, page_id: str) -> JSONDict:
        """``GET /pages/{id}``: properties and timestamps, no content."""
        return await self._transport.request("GET", f"/pages/{page_id}")

    async def update(
        self,
        page_id: str,
        properties: JSONDict | None = None,
        archived: bool | None = None,
    ) -> JSONDict:
        """``PATCH /pages/{id}``, sending only the arguments that are set."""
        payload = drop_none(properties=properties, archived=archived)
        return await self._transport.request("PATCH", f"/pages/{page_id}", json=payload)
