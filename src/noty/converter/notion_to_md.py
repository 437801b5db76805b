"""Notion block list to Markdown renderer.

Converts block objects as returned by ``GET /blocks/{id}/children`` into
Markdown text, one or more lines per block.  Nested blocks are not
embedded in the API's block objects; when a block has ``has_children`` set
the renderer awaits an injected ``fetch_children`` coroutine function and
renders the result one indent level (two spaces) deeper.

Usage::

    from noty.converter.notion_to_md import NotionToMarkdownRenderer

    renderer = NotionToMarkdownRenderer()
    md = await renderer.render(blocks, fetch_children=blocks_api.get_children)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from noty.models import BlockType

from .inline_renderer import render_rich_text
from .rich_text import extract_text

FetchChildren = Callable[[str], Awaitable[list[dict[str, Any]]]]

_INDENT = "  "


def _rich_text(data: dict[str, Any]) -> str:
    return render_rich_text(data.get("rich_text"))


def _prefixed(prefix: str) -> Callable[[dict[str, Any]], str]:
    def render(data: dict[str, Any]) -> str:
        return f"{prefix}{_rich_text(data)}"
    return render


def _render_to_do(data: dict[str, Any]) -> str:
    mark = "x" if data.get("checked") else " "
    return f"- [{mark}] {_rich_text(data)}"


def _render_callout(data: dict[str, Any]) -> str:
    icon = data.get("icon") or {}
    emoji = icon.get("emoji") or ""
    return f"> {emoji} {_rich_text(data)}"


def _render_image(data: dict[str, Any]) -> str:
    if data.get("type") == "file":
        url = (data.get("file") or {}).get("url") or ""
    else:
        url = (data.get("external") or {}).get("url") or ""
    caption = render_rich_text(data.get("caption"))
    return f"![{caption}]({url})"


def _render_link_block(data: dict[str, Any]) -> str:
    url = data.get("url") or ""
    caption = render_rich_text(data.get("caption"))
    return f"[{caption or url}]({url})"


def _render_equation(data: dict[str, Any]) -> str:
    return f"$${data.get('expression') or ''}$$"


def _render_table_row(data: dict[str, Any]) -> str:
    cells = data.get("cells") or []
    return "| " + " | ".join(render_rich_text(cell) for cell in cells) + " |"


_BlockRenderer = Callable[[dict[str, Any]], str]

# Single-line renderers.  CODE, TABLE and TABLE_ROW are handled by the
# renderer itself because they depend on indentation or neighbours.
_BLOCK_RENDERERS: dict[BlockType, _BlockRenderer] = {
    BlockType.PARAGRAPH: _prefixed(""),
    BlockType.HEADING_1: _prefixed("# "),
    BlockType.HEADING_2: _prefixed("## "),
    BlockType.HEADING_3: _prefixed("### "),
    BlockType.BULLETED_LIST_ITEM: _prefixed("- "),
    # Always "1."; Markdown renderers number the items.
    BlockType.NUMBERED_LIST_ITEM: _prefixed("1. "),
    BlockType.TO_DO: _render_to_do,
    BlockType.TOGGLE: _prefixed("- "),
    BlockType.QUOTE: _prefixed("> "),
    BlockType.CALLOUT: _render_callout,
    BlockType.DIVIDER: lambda data: "---",
    BlockType.IMAGE: _render_image,
    BlockType.BOOKMARK: _render_link_block,
    BlockType.EMBED: _render_link_block,
    BlockType.EQUATION: _render_equation,
}


class NotionToMarkdownRenderer:
    """Render Notion blocks to Markdown.

    Stateless between calls: every :meth:`render` call keeps its own line
    buffer and table state, so one instance can serve concurrent renders.
    Unrecognized block types produce no output.
    """

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def render(
        self,
        blocks: list[dict[str, Any]],
        fetch_children: FetchChildren | None = None,
        indent: int = 0,
    ) -> str:
        """Render *blocks* to Markdown, fetching nested blocks on demand.

        Parameters
        ----------
        blocks:
            Block objects in page order.
        fetch_children:
            Coroutine function returning the child blocks of a block id.
            When ``None``, children are skipped.  Errors it raises
            propagate unchanged.
        indent:
            Indent level of *blocks*; each level adds two spaces.

        Returns
        -------
        str
            Lines joined by ``\\n`` with no trailing newline.
        """
        lines: list[str] = []
        table_start = True

        for block in blocks:
            table_start = self._append_block(block, indent, lines, table_start)

            block_id = block.get("id")
            if block.get("has_children") and block_id and fetch_children is not None:
                children = await fetch_children(block_id)
                child_md = await self.render(children, fetch_children, indent + 1)
                if child_md:
                    lines.append(child_md)

        return "\n".join(lines)

    def render_sync(self, blocks: list[dict[str, Any]], indent: int = 0) -> str:
        """Render *blocks* without fetching any children."""
        lines: list[str] = []
        table_start = True
        for block in blocks:
            table_start = self._append_block(block, indent, lines, table_start)
        return "\n".join(lines)

    def render_block(self, block: dict[str, Any], indent: int = 0) -> str:
        """Render one block's own lines (a lone table row gets its separator)."""
        lines: list[str] = []
        self._append_block(block, indent, lines, True)
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _append_block(
        self,
        block: dict[str, Any],
        indent: int,
        lines: list[str],
        table_start: bool,
    ) -> bool:
        """Append the lines for *block* and return the next table state.

        ``table_start`` is ``True`` while the next ``table_row`` would be
        the first of a run and so needs a separator after it.
        """
        block_type = BlockType.from_wire(block.get("type"))
        data = block.get(block.get("type", "")) if block_type is not None else None
        if not isinstance(data, dict):
            return True

        prefix = _INDENT * indent

        if block_type is BlockType.TABLE_ROW:
            cells = data.get("cells")
            if cells is None:
                return table_start
            lines.append(prefix + _render_table_row(data))
            if table_start:
                lines.append(prefix + "| " + " | ".join("---" for _ in cells) + " |")
            return False

        if block_type is BlockType.CODE:
            language = data.get("language") or ""
            code = extract_text(data.get("rich_text"))
            lines.append(f"{prefix}```{language}\n{prefix}{code}\n{prefix}```")
            return True

        renderer = _BLOCK_RENDERERS.get(block_type)
        if renderer is not None:
            line = renderer(data)
            if line:
                lines.append(prefix + line)
        return True


# ------------------------------------------------------------------
# Module-level shortcuts
# ------------------------------------------------------------------


async def blocks_to_markdown(
    blocks: list[dict[str, Any]],
    fetch_children: FetchChildren | None = None,
    indent: int = 0,
) -> str:
    """Shortcut for ``NotionToMarkdownRenderer().render(...)``."""
    return await NotionToMarkdownRenderer().render(blocks, fetch_children, indent)


def blocks_to_markdown_sync(blocks: list[dict[str, Any]], indent: int = 0) -> str:
    """Shortcut for ``NotionToMarkdownRenderer().render_sync(...)``."""
    return NotionToMarkdownRenderer().render_sync(blocks, indent)
