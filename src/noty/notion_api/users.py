"""User API wrappers for the Notion API."""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


class AsyncUserAPI:
    """Asynchronous wrapper for the Notion Users API.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def list(self) -> list[dict[str, Any]]:
        """Return every user in the workspace, auto-paginating."""
        return [user async for user in self._transport.paginate("/users", method="GET")]

    async def me(self) -> dict[str, Any]:
        """Return the bot user that owns the configured token."""
        return await self._transport.request("GET", "/users/me")
