"""Tests for noty.converter.inline_renderer."""

from __future__ import annotations

import pytest

from noty.converter.inline_renderer import render_rich_text, render_span, render_spans
from noty.models import InlineSpan


class TestRenderSpan:
    @pytest.mark.parametrize(
        "span,expected",
        [
            (InlineSpan("t"), "t"),
            (InlineSpan("t", bold=True), "**t**"),
            (InlineSpan("t", italic=True), "*t*"),
            (InlineSpan("t", bold=True, italic=True), "***t***"),
            (InlineSpan("t", strikethrough=True), "~~t~~"),
            (InlineSpan("t", code=True), "`t`"),
            (InlineSpan("t", href="https://x"), "[t](https://x)"),
        ],
    )
    def test_styles(self, span, expected):
        assert render_span(span) == expected

    def test_wrapping_order(self):
        span = InlineSpan("t", bold=True, code=True, strikethrough=True, href="u")
        assert render_span(span) == "[~~**`t`**~~](u)"

    def test_underline_dropped(self):
        assert render_span(InlineSpan("t", underline=True)) == "t"

    def test_empty_text_renders_nothing(self):
        assert render_span(InlineSpan("", bold=True, href="u")) == ""


class TestRenderSpans:
    def test_concatenates(self):
        spans = [InlineSpan("Hello "), InlineSpan("world", bold=True)]
        assert render_spans(spans) == "Hello **world**"

    def test_empty(self):
        assert render_spans([]) == ""


class TestRenderRichText:
    def test_none_and_empty(self):
        assert render_rich_text(None) == ""
        assert render_rich_text([]) == ""

    def test_api_segments(self):
        segs = [
            {"plain_text": "see ", "annotations": {}},
            {"plain_text": "docs", "href": "https://d", "annotations": {"italic": True}},
        ]
        assert render_rich_text(segs) == "see [*docs*](https://d)"
