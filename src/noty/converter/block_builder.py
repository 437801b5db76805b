"""Build Notion block-creation payloads.

Every payload has the shape accepted by ``PATCH /blocks/{id}/children``::

    {"object": "block", "type": "<type>", "<type>": {...}}
"""

from __future__ import annotations

from typing import Any

from noty.models import BlockType

from .rich_text import build_rich_text, plain_rich_text

DEFAULT_CODE_LANGUAGE = "plain text"


def _make_block(block_type: BlockType, data: dict[str, Any]) -> dict[str, Any]:
    tag = block_type.value
    return {"object": "block", "type": tag, tag: data}


def build_text_block(block_type: BlockType, text: str) -> dict[str, Any]:
    """Build a block whose only payload is tokenized rich_text.

    Used for paragraphs, headings, list items and quotes.
    """
    return _make_block(block_type, {"rich_text": build_rich_text(text)})


def build_code_block(content: str, language: str = "") -> dict[str, Any]:
    """Build a code block holding *content* as one unstyled segment."""
    return _make_block(BlockType.CODE, {
        "rich_text": plain_rich_text(content),
        "language": language or DEFAULT_CODE_LANGUAGE,
    })


def build_divider() -> dict[str, Any]:
    return _make_block(BlockType.DIVIDER, {})
