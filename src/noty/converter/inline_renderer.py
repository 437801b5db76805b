"""Inline rendering: styled spans to Markdown strings.

Annotation wrapping order (innermost first)::

    code -> bold -> italic -> strikethrough -> link

so a bold and italic span renders as ``***text***`` and a linked bold span
as ``[**text**](url)``.  Text is emitted without escaping; the output is
meant to be read back by :func:`noty.converter.rich_text.tokenize`, which
has no escape syntax either.  Underline has no Markdown form and is dropped.
"""

from __future__ import annotations

from typing import Any

from noty.models import InlineSpan

from .rich_text import spans_from_rich_text


def render_span(span: InlineSpan) -> str:
    """Render one span, or ``""`` if it has no text."""
    text = span.text
    if not text:
        return ""

    if span.code:
        text = f"`{text}`"
    if span.bold:
        text = f"**{text}**"
    if span.italic:
        text = f"*{text}*"
    if span.strikethrough:
        text = f"~~{text}~~"

    if span.href:
        text = f"[{text}]({span.href})"

    return text


def render_spans(spans: list[InlineSpan]) -> str:
    """Render a span sequence as one line of inline Markdown."""
    return "".join(render_span(span) for span in spans)


def render_rich_text(segments: list[dict[str, Any]] | None) -> str:
    """Render a Notion rich_text array to inline Markdown."""
    if not segments:
        return ""
    return render_spans(spans_from_rich_text(segments))
