"""Markdown <-> Notion conversion.

Public API:

- :class:`MarkdownToNotionConverter` / :func:`markdown_to_blocks` -- Markdown -> blocks.
- :class:`NotionToMarkdownRenderer` / :func:`blocks_to_markdown` -- blocks -> Markdown.
- :func:`tokenize` -- inline Markdown -> :class:`~noty.models.InlineSpan` list.
- :func:`render_spans` / :func:`render_rich_text` -- spans or rich_text -> inline Markdown.
"""

from noty.converter.inline_renderer import render_rich_text, render_spans
from noty.converter.md_to_notion import MarkdownToNotionConverter, markdown_to_blocks
from noty.converter.notion_to_md import (
    NotionToMarkdownRenderer,
    blocks_to_markdown,
    blocks_to_markdown_sync,
)
from noty.converter.rich_text import build_rich_text, spans_from_rich_text, tokenize

__all__ = [
    "MarkdownToNotionConverter",
    "NotionToMarkdownRenderer",
    "blocks_to_markdown",
    "blocks_to_markdown_sync",
    "build_rich_text",
    "markdown_to_blocks",
    "render_rich_text",
    "render_spans",
    "spans_from_rich_text",
    "tokenize",
]
