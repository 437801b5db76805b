"""Markdown to Notion block conversion.

:class:`MarkdownToNotionConverter` runs a single-pass, line-based scanner
over the input.  It has two states:

* **scan** -- each line is classified by the first matching rule below.
* **fence** -- entered on an opening code fence; raw lines are collected
  verbatim until a line that is exactly three backticks, or until the end
  of input when the fence is never closed.

Scan rules, in priority order:

1. ```` ```lang ```` opens a fence (language defaults to ``plain text``)
2. a line of three or more dashes -> divider
3. ``#``/``##``/``###`` + space + text -> heading_1/2/3
4. ``-``/``*`` + space + text -> bulleted_list_item
5. digits + ``.`` + space + text -> numbered_list_item
6. ``>`` + space + text -> quote
7. blank line -> nothing
8. anything else -> paragraph

Inline content is tokenized with :func:`noty.converter.rich_text.tokenize`;
code fences keep their content as a single unstyled segment.  The result
is unbounded in length, so callers must batch it before sending (see
:func:`noty.utils.chunk_children`).
"""

from __future__ import annotations

import re
from typing import Any

from noty.models import BlockType

from .block_builder import build_code_block, build_divider, build_text_block

_FENCE_OPEN_RE = re.compile(r"```(\w*)", re.ASCII)
_FENCE_CLOSE = "```"
_DIVIDER_RE = re.compile(r"---+")

# (pattern, block type) pairs tried in order after fences and dividers.
# Group 1 is the inline text handed to the tokenizer.
_LINE_RULES: tuple[tuple[re.Pattern[str], BlockType], ...] = (
    (re.compile(r"# (.+)"), BlockType.HEADING_1),
    (re.compile(r"## (.+)"), BlockType.HEADING_2),
    (re.compile(r"### (.+)"), BlockType.HEADING_3),
    (re.compile(r"[-*] (.+)"), BlockType.BULLETED_LIST_ITEM),
    (re.compile(r"\d+\. (.+)", re.ASCII), BlockType.NUMBERED_LIST_ITEM),
    (re.compile(r"> (.+)"), BlockType.QUOTE),
)


class MarkdownToNotionConverter:
    """Convert Markdown text to Notion block-creation payloads.

    The converter holds no state between calls and is safe to share.

    Examples
    --------
    >>> blocks = MarkdownToNotionConverter().convert("# Hello\\n\\nWorld")
    >>> [b["type"] for b in blocks]
    ['heading_1', 'paragraph']
    """

    def convert(self, markdown: str) -> list[dict[str, Any]]:
        """Parse *markdown* into block payloads, in source order.

        Parameters
        ----------
        markdown:
            Raw Markdown text.  ``\\n`` separates lines.

        Returns
        -------
        list[dict]
            Block payloads.  Empty or whitespace-only input yields ``[]``.
        """
        lines = markdown.split("\n")
        blocks: list[dict[str, Any]] = []
        i = 0

        while i < len(lines):
            line = lines[i]

            fence = _FENCE_OPEN_RE.fullmatch(line)
            if fence:
                code_lines: list[str] = []
                i += 1
                while i < len(lines) and lines[i] != _FENCE_CLOSE:
                    code_lines.append(lines[i])
                    i += 1
                # Skip the closing fence; past the end when unterminated.
                i += 1
                blocks.append(build_code_block("\n".join(code_lines), fence.group(1)))
                continue

            i += 1
            block = self._convert_line(line)
            if block is not None:
                blocks.append(block)

        return blocks

    @staticmethod
    def _convert_line(line: str) -> dict[str, Any] | None:
        """Classify a single line outside a fence."""
        if _DIVIDER_RE.fullmatch(line.strip()):
            return build_divider()

        for pattern, block_type in _LINE_RULES:
            match = pattern.fullmatch(line)
            if match:
                return build_text_block(block_type, match.group(1))

        if not line.strip():
            return None

        return build_text_block(BlockType.PARAGRAPH, line)


def markdown_to_blocks(markdown: str) -> list[dict[str, Any]]:
    """Shortcut for ``MarkdownToNotionConverter().convert(markdown)``."""
    return MarkdownToNotionConverter().convert(markdown)
