"""Public data models for noty.

The conversion engine works on two small types defined here:
:class:`BlockType`, the closed set of block kinds it understands, and
:class:`InlineSpan`, one run of styled text.  The remaining dataclasses are
the flattened views the client returns for pages, databases, comments,
users and search hits.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Conversion types
# ---------------------------------------------------------------------------

class BlockType(str, Enum):
    """Block kinds handled by the converters.

    Values are the ``type`` tags used on the wire.  Any other tag is
    treated as unrecognized and skipped.
    """

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    CODE = "code"
    QUOTE = "quote"
    CALLOUT = "callout"
    DIVIDER = "divider"
    IMAGE = "image"
    TABLE = "table"
    TABLE_ROW = "table_row"
    BOOKMARK = "bookmark"
    EMBED = "embed"
    EQUATION = "equation"

    @classmethod
    def from_wire(cls, tag: Any) -> BlockType | None:
        """Return the member for *tag*, or ``None`` if it is not known."""
        try:
            return cls(tag)
        except ValueError:
            return None


@dataclass(frozen=True)
class InlineSpan:
    """A contiguous run of text sharing one style.

    Attributes
    ----------
    text:
        The span's characters, without any Markdown delimiters.
    bold, italic, strikethrough, code:
        Style flags rendered to and parsed from Markdown.
    underline:
        Carried through from Notion annotations; Markdown has no syntax for
        it, so it is never rendered.
    href:
        Link target, or ``None``.
    """

    text: str
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    href: str | None = None


# ---------------------------------------------------------------------------
# Client result types
# ---------------------------------------------------------------------------

@dataclass
class SearchResult:
    """One hit returned by :meth:`NotyClient.search`."""

    id: str
    title: str
    type: str
    url: str
    last_edited_time: str


@dataclass
class PageResult:
    """Flattened page metadata.

    ``properties`` is the raw property map as returned by the API.
    """

    id: str
    title: str
    url: str
    created_time: str
    last_edited_time: str
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass
class DatabaseResult:
    """Flattened database metadata; ``properties`` holds the schema."""

    id: str
    title: str
    url: str
    created_time: str
    last_edited_time: str
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass
class QueryResult:
    """One page of database query results."""

    results: list[PageResult] = field(default_factory=list)
    has_more: bool = False
    next_cursor: str | None = None


@dataclass
class CommentAuthor:
    id: str
    name: str | None = None


@dataclass
class Comment:
    """A page comment with its rich text flattened to plain text."""

    id: str
    created_time: str
    last_edited_time: str
    created_by: CommentAuthor
    rich_text: str


@dataclass
class User:
    """A workspace member or bot."""

    id: str
    name: str
    type: str
    email: str | None = None
    avatar_url: str | None = None


@dataclass
class AuthInfo:
    """Identity of the integration behind the configured token."""

    bot_id: str
    workspace_name: str
    workspace_id: str
