"""Tokenize inline Markdown into styled spans and Notion rich_text.

The tokenizer recognises a fixed, non-nesting subset of inline Markdown.
One alternation pattern is scanned left to right; branch order decides
precedence when several delimiters could start at the same position::

    [text](url)  >  `code`  >  ***bold italic***  >  **bold**  >  *italic*  >  ~~strike~~

Text between matches becomes plain spans.  There are no backslash escapes
and no emphasis inside emphasis.

A rich_text segment produced by :func:`build_rich_text` looks like::

    {
        "type": "text",
        "text": {"content": "hello", "link": {"url": "https://..."}},
        "annotations": {"bold": false, "italic": false, "strikethrough": false,
                        "underline": false, "code": false}
    }

``link`` is only present for linked spans.
"""

from __future__ import annotations

import re
from typing import Any

from noty.models import InlineSpan

_INLINE_RE = re.compile(
    r"(?P<link>\[(?P<link_text>[^\]]+)\]\((?P<link_url>[^)]+)\))"
    r"|(?P<code>`(?P<code_text>[^`]+)`)"
    r"|(?P<bold_italic>\*\*\*(?P<bold_italic_text>[^*]+)\*\*\*)"
    r"|(?P<bold>\*\*(?P<bold_text>[^*]+)\*\*)"
    r"|(?P<italic>\*(?P<italic_text>[^*]+)\*)"
    r"|(?P<strike>~~(?P<strike_text>[^~]+)~~)"
)


def tokenize(line: str) -> list[InlineSpan]:
    """Split *line* into styled spans.

    Parameters
    ----------
    line:
        A single line of inline Markdown (never a code fence).

    Returns
    -------
    list[InlineSpan]
        Spans in source order.  Empty input yields ``[]``; a line without
        delimiters yields a single plain span.
    """
    spans: list[InlineSpan] = []
    last = 0

    for match in _INLINE_RE.finditer(line):
        if match.start() > last:
            spans.append(InlineSpan(line[last:match.start()]))

        if match.group("link"):
            spans.append(InlineSpan(match.group("link_text"), href=match.group("link_url")))
        elif match.group("code"):
            spans.append(InlineSpan(match.group("code_text"), code=True))
        elif match.group("bold_italic"):
            spans.append(InlineSpan(match.group("bold_italic_text"), bold=True, italic=True))
        elif match.group("bold"):
            spans.append(InlineSpan(match.group("bold_text"), bold=True))
        elif match.group("italic"):
            spans.append(InlineSpan(match.group("italic_text"), italic=True))
        elif match.group("strike"):
            spans.append(InlineSpan(match.group("strike_text"), strikethrough=True))

        last = match.end()

    if last < len(line):
        spans.append(InlineSpan(line[last:]))

    return spans


def span_to_rich_text(span: InlineSpan) -> dict[str, Any]:
    """Encode one span as a Notion rich_text text segment."""
    text: dict[str, Any] = {"content": span.text}
    if span.href:
        text["link"] = {"url": span.href}
    return {
        "type": "text",
        "text": text,
        "annotations": {
            "bold": span.bold,
            "italic": span.italic,
            "strikethrough": span.strikethrough,
            "underline": span.underline,
            "code": span.code,
        },
    }


def build_rich_text(line: str) -> list[dict[str, Any]]:
    """Tokenize *line* and encode the spans as a rich_text array."""
    return [span_to_rich_text(span) for span in tokenize(line)]


def plain_rich_text(content: str) -> list[dict[str, Any]]:
    """A single unstyled segment holding *content* verbatim."""
    return [span_to_rich_text(InlineSpan(content))]


def spans_from_rich_text(segments: list[dict[str, Any]] | None) -> list[InlineSpan]:
    """Decode a rich_text array as returned by the API into spans.

    Text comes from ``plain_text`` (API responses) or ``text.content``
    (locally built payloads); the link from ``href`` or ``text.link.url``.
    Missing annotations default to unstyled.
    """
    spans: list[InlineSpan] = []
    for seg in segments or []:
        text_obj = seg.get("text") or {}
        content = seg.get("plain_text") or text_obj.get("content") or ""
        link = text_obj.get("link") or {}
        href = seg.get("href") or link.get("url")
        annotations = seg.get("annotations") or {}
        spans.append(InlineSpan(
            content,
            bold=bool(annotations.get("bold", False)),
            italic=bool(annotations.get("italic", False)),
            strikethrough=bool(annotations.get("strikethrough", False)),
            underline=bool(annotations.get("underline", False)),
            code=bool(annotations.get("code", False)),
            href=href or None,
        ))
    return spans


def extract_text(segments: list[dict[str, Any]] | None) -> str:
    """Concatenate the plain text of a rich_text array."""
    return "".join(span.text for span in spans_from_rich_text(segments))
