"""Asynchronous Notion document client.

:class:`NotyClient` ties the transport, the endpoint wrappers and the
Markdown converters together.  Every method that takes a page or database
accepts either a bare id or a Notion URL.

Usage::

    import asyncio
    from noty import NotyClient

    async def main():
        async with NotyClient(token="secret_xxx") as client:
            page = await client.create_page(
                parent_id="https://www.notion.so/Team-0123456789abcdef0123456789abcdef",
                title="My Page",
                content="# Hello\\n\\nWorld",
            )
            print(await client.get_page(page.id))

    asyncio.run(main())
"""

from __future__ import annotations

from typing import Any

from noty.config import NotyConfig
from noty.converter.md_to_notion import MarkdownToNotionConverter
from noty.converter.notion_to_md import NotionToMarkdownRenderer
from noty.converter.rich_text import extract_text, plain_rich_text
from noty.errors import NotyConfigError
from noty.ids import normalize_id
from noty.models import (
    AuthInfo,
    Comment,
    CommentAuthor,
    DatabaseResult,
    PageResult,
    QueryResult,
    SearchResult,
    User,
)
from noty.notion_api.blocks import AsyncBlockAPI
from noty.notion_api.comments import AsyncCommentAPI
from noty.notion_api.databases import AsyncDatabaseAPI
from noty.notion_api.pages import AsyncPageAPI
from noty.notion_api.search import AsyncSearchAPI
from noty.notion_api.transport import AsyncNotionTransport
from noty.notion_api.users import AsyncUserAPI
from noty.observability import get_logger
from noty.properties import flatten_properties
from noty.utils.chunk import chunk_children

log = get_logger("noty.client")


def extract_title(obj: dict[str, Any]) -> str:
    """Return the plain text of the first ``title``-typed property, or ``""``."""
    for prop in (obj.get("properties") or {}).values():
        if isinstance(prop, dict) and prop.get("type") == "title":
            title = prop.get("title")
            if isinstance(title, list):
                return extract_text(title)
    return ""


def page_to_result(page: dict[str, Any]) -> PageResult:
    return PageResult(
        id=page.get("id", ""),
        title=extract_title(page),
        url=page.get("url") or "",
        created_time=page.get("created_time") or "",
        last_edited_time=page.get("last_edited_time") or "",
        properties=page.get("properties") or {},
    )


def comment_to_result(comment: dict[str, Any]) -> Comment:
    author = comment.get("created_by") or {}
    created = comment.get("created_time") or ""
    return Comment(
        id=comment.get("id", ""),
        created_time=created,
        last_edited_time=comment.get("last_edited_time") or created,
        created_by=CommentAuthor(id=author.get("id") or "", name=author.get("name")),
        rich_text=extract_text(comment.get("rich_text")),
    )


def user_to_result(user: dict[str, Any]) -> User:
    person = user.get("person") or {}
    return User(
        id=user.get("id", ""),
        name=user.get("name") or "",
        type="bot" if user.get("type") == "bot" else "person",
        email=person.get("email"),
        avatar_url=user.get("avatar_url"),
    )


class NotyClient:
    """Asynchronous Notion document client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`NotyConfig`.

    Raises
    ------
    NotyConfigError
        If *token* is empty.
    """

    def __init__(self, token: str, **kwargs: Any) -> None:
        if not token:
            raise NotyConfigError("Notion token is required")
        self._config = NotyConfig(token=token, **kwargs)
        self._transport = AsyncNotionTransport(self._config)
        self._blocks = AsyncBlockAPI(self._transport)
        self._pages = AsyncPageAPI(self._transport)
        self._databases = AsyncDatabaseAPI(self._transport)
        self._comments = AsyncCommentAPI(self._transport)
        self._users = AsyncUserAPI(self._transport)
        self._search = AsyncSearchAPI(self._transport)
        self._converter = MarkdownToNotionConverter()
        self._renderer = NotionToMarkdownRenderer()

    @classmethod
    def from_env(cls, **kwargs: Any) -> NotyClient:
        """Create a client whose token is read from ``$NOTION_TOKEN``."""
        config = NotyConfig.from_env()
        return cls(config.token, **kwargs)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(
        self,
        query: str,
        filter: str | None = None,
        limit: int = 10,
        sort: dict[str, Any] | None = None,
    ) -> list[SearchResult]:
        """Search pages and databases by title.

        Parameters
        ----------
        query:
            Text matched against titles.
        filter:
            ``"page"`` or ``"database"`` to restrict the object type.
        limit:
            Maximum number of results.
        sort:
            Optional Notion sort object.
        """
        object_filter = {"property": "object", "value": filter} if filter else None
        log.debug(
            "Searching workspace",
            extra={"extra_fields": {"op": "search", "filter": filter, "limit": limit}},
        )
        response = await self._search.search(
            query, filter=object_filter, sort=sort, page_size=limit
        )

        results: list[SearchResult] = []
        for item in response.get("results", []):
            title = extract_title(item)
            if not title:
                db_title = item.get("title") or []
                title = (db_title[0].get("plain_text") or "") if db_title else ""
            results.append(SearchResult(
                id=item.get("id", ""),
                title=title,
                type="database" if item.get("object") == "database" else "page",
                url=item.get("url") or "",
                last_edited_time=item.get("last_edited_time") or "",
            ))
        return results

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    async def get_page(self, id_or_url: str) -> str:
        """Return a page's content as Markdown, including nested blocks."""
        page_id = normalize_id(id_or_url)
        log.debug(
            "Exporting page",
            extra={"extra_fields": {"op": "get_page", "page_id": page_id}},
        )
        blocks = await self._blocks.get_children(page_id)
        return await self._renderer.render(blocks, fetch_children=self._blocks.get_children)

    async def get_page_metadata(self, id_or_url: str) -> PageResult:
        """Return a page's flattened metadata without its content."""
        page = await self._pages.retrieve(normalize_id(id_or_url))
        return page_to_result(page)

    async def create_page(
        self,
        parent_id: str,
        title: str,
        properties: dict[str, Any] | None = None,
        content: str | None = None,
        parent_type: str = "page_id",
    ) -> PageResult:
        """Create a page under a page or database.

        Parameters
        ----------
        parent_id:
            Id or URL of the parent.
        title:
            Page title, stored in the ``Name`` property unless
            *properties* already sets ``Name``.
        properties:
            Plain property values, flattened with
            :func:`~noty.properties.flatten_properties`.
        content:
            Optional Markdown body.  The first batch of blocks is sent with
            the create call; the rest are appended afterwards.
        parent_type:
            ``"page_id"`` or ``"database_id"``.
        """
        parent = {parent_type: normalize_id(parent_id)}
        wire_properties = flatten_properties(properties or {})
        if title and "Name" not in wire_properties:
            wire_properties["Name"] = {"title": [{"text": {"content": title}}]}

        blocks = self._converter.convert(content) if content else []
        batches = chunk_children(blocks, self._config.max_batch_size)

        log.debug(
            "Creating page",
            extra={
                "extra_fields": {
                    "op": "create_page",
                    "parent_type": parent_type,
                    "blocks": len(blocks),
                    "batches": len(batches),
                }
            },
        )
        page = await self._pages.create(
            parent=parent,
            properties=wire_properties,
            children=batches[0] if batches else None,
        )
        for batch in batches[1:]:
            await self._blocks.append_children(
                page["id"], batch, batch_size=self._config.max_batch_size
            )
        return page_to_result(page)

    async def update_page(
        self,
        id_or_url: str,
        properties: dict[str, Any] | None = None,
        content: str | None = None,
    ) -> PageResult:
        """Update a page's properties and/or replace its content.

        When *content* is given, every existing top-level block is deleted
        and the converted Markdown is appended in its place.  The page is
        re-read afterwards so the result reflects both changes.
        """
        page_id = normalize_id(id_or_url)

        if properties:
            await self._pages.update(page_id, properties=flatten_properties(properties))

        if content is not None:
            existing = await self._blocks.get_children(page_id)
            log.debug(
                "Replacing page content",
                extra={
                    "extra_fields": {
                        "op": "update_page",
                        "page_id": page_id,
                        "deleted": len(existing),
                    }
                },
            )
            for block in existing:
                await self._blocks.delete(block["id"])
            new_blocks = self._converter.convert(content)
            if new_blocks:
                await self._blocks.append_children(
                    page_id, new_blocks, batch_size=self._config.max_batch_size
                )

        page = await self._pages.retrieve(page_id)
        return page_to_result(page)

    async def append_markdown(self, id_or_url: str, markdown: str) -> int:
        """Append converted Markdown to the end of a page or block.

        Returns
        -------
        int
            Number of top-level blocks appended.
        """
        blocks = self._converter.convert(markdown)
        if not blocks:
            return 0
        await self._blocks.append_children(
            normalize_id(id_or_url), blocks, batch_size=self._config.max_batch_size
        )
        return len(blocks)

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    async def get_database(self, id_or_url: str) -> DatabaseResult:
        """Return a database's title, timestamps and property schema."""
        db = await self._databases.retrieve(normalize_id(id_or_url))
        return DatabaseResult(
            id=db.get("id", ""),
            title=extract_text(db.get("title")),
            url=db.get("url") or "",
            created_time=db.get("created_time") or "",
            last_edited_time=db.get("last_edited_time") or "",
            properties=db.get("properties") or {},
        )

    async def query_database(
        self,
        id_or_url: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        page_size: int = 100,
        start_cursor: str | None = None,
    ) -> QueryResult:
        """Query one page of database rows.

        Pass the returned ``next_cursor`` as *start_cursor* to continue.
        """
        response = await self._databases.query(
            normalize_id(id_or_url),
            filter=filter,
            sorts=sorts,
            page_size=page_size,
            start_cursor=start_cursor,
        )
        return QueryResult(
            results=[page_to_result(page) for page in response.get("results", [])],
            has_more=bool(response.get("has_more", False)),
            next_cursor=response.get("next_cursor"),
        )

    # ------------------------------------------------------------------
    # Comments and users
    # ------------------------------------------------------------------

    async def list_comments(self, id_or_url: str) -> list[Comment]:
        """Return every comment on a page."""
        comments = await self._comments.list(normalize_id(id_or_url))
        return [comment_to_result(c) for c in comments]

    async def create_comment(self, id_or_url: str, body: str) -> Comment:
        """Add a plain-text comment to a page."""
        comment = await self._comments.create(normalize_id(id_or_url), plain_rich_text(body))
        return comment_to_result(comment)

    async def list_users(self) -> list[User]:
        """Return every user in the workspace."""
        return [user_to_result(u) for u in await self._users.list()]

    async def auth_test(self) -> AuthInfo:
        """Return the bot identity behind the configured token."""
        me = await self._users.me()
        bot = me.get("bot") or {}
        owner = bot.get("owner") or {}
        # TODO: /users/me does not expose the workspace id; switch to the
        # token introspection endpoint once the pinned API version has it.
        workspace_id = "true" if owner.get("workspace") else me.get("id", "")
        return AuthInfo(
            bot_id=me.get("id") or "",
            workspace_name=bot.get("workspace_name") or "",
            workspace_id=workspace_id,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying HTTP transport."""
        await self._transport.close()

    async def __aenter__(self) -> NotyClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
