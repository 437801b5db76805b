"""Tests for MarkdownToNotionConverter."""

from __future__ import annotations

import pytest

from noty.converter.block_builder import build_code_block, build_divider, build_text_block
from noty.converter.md_to_notion import markdown_to_blocks
from noty.converter.rich_text import extract_text
from noty.models import BlockType


def _types(blocks):
    return [b["type"] for b in blocks]


def _text(block):
    return extract_text(block[block["type"]]["rich_text"])


class TestEmptyInput:
    @pytest.mark.parametrize("md", ["", "   \n\n  ", "\n"])
    def test_yields_nothing(self, converter, md):
        assert converter.convert(md) == []


class TestHeadings:
    def test_heading_1(self, converter):
        blocks = converter.convert("# Title")
        assert len(blocks) == 1
        assert blocks[0]["type"] == "heading_1"
        assert _text(blocks[0]) == "Title"

    @pytest.mark.parametrize("level", [1, 2, 3])
    def test_levels(self, converter, level):
        blocks = converter.convert("#" * level + " Head")
        assert _types(blocks) == [f"heading_{level}"]

    def test_four_hashes_is_paragraph(self, converter):
        assert _types(converter.convert("#### Deep")) == ["paragraph"]

    def test_no_space_is_paragraph(self, converter):
        assert _types(converter.convert("#Title")) == ["paragraph"]

    def test_heading_inline_styles(self, converter):
        seg = converter.convert("# A **b**")[0]["heading_1"]["rich_text"][1]
        assert seg["annotations"]["bold"] is True


class TestLists:
    def test_bullets_in_order(self, converter):
        blocks = converter.convert("- Item 1\n- Item 2")
        assert _types(blocks) == ["bulleted_list_item", "bulleted_list_item"]
        assert [_text(b) for b in blocks] == ["Item 1", "Item 2"]

    def test_star_bullet(self, converter):
        assert _types(converter.convert("* Item")) == ["bulleted_list_item"]

    def test_numbered(self, converter):
        blocks = converter.convert("1. One\n42. Two")
        assert _types(blocks) == ["numbered_list_item", "numbered_list_item"]
        assert _text(blocks[1]) == "Two"

    def test_non_ascii_digits_are_paragraph(self, converter):
        assert _types(converter.convert("١. x")) == ["paragraph"]

    def test_indented_bullet_is_paragraph(self, converter):
        blocks = converter.convert("  - nested")
        assert _types(blocks) == ["paragraph"]
        assert _text(blocks[0]) == "  - nested"


class TestFences:
    def test_fenced_code(self, converter):
        blocks = converter.convert("```ts\nconst x = 1;\n```")
        assert len(blocks) == 1
        code = blocks[0]["code"]
        assert blocks[0]["type"] == "code"
        assert code["language"] == "ts"
        assert _text(blocks[0]) == "const x = 1;"

    def test_default_language(self, converter):
        assert converter.convert("```\nx\n```")[0]["code"]["language"] == "plain text"

    def test_content_not_tokenized(self, converter):
        block = converter.convert("```\n**a** # b\n- c\n```")[0]
        assert _text(block) == "**a** # b\n- c"
        assert len(block["code"]["rich_text"]) == 1

    def test_unterminated_consumes_rest(self, converter):
        blocks = converter.convert("para\n```py\nx = 1\n# not a heading")
        assert _types(blocks) == ["paragraph", "code"]
        assert _text(blocks[1]) == "x = 1\n# not a heading"

    def test_empty_fence(self, converter):
        blocks = converter.convert("```\n```")
        assert _text(blocks[0]) == ""

    def test_fence_with_space_before_language_is_paragraph(self, converter):
        assert _types(converter.convert("``` py")) == ["paragraph"]

    def test_non_ascii_language_is_paragraph(self, converter):
        assert _types(converter.convert("```日本")) == ["paragraph"]

    def test_text_after_fence_resumes_scanning(self, converter):
        blocks = converter.convert("```\na\n```\n# H")
        assert _types(blocks) == ["code", "heading_1"]


class TestOtherLines:
    @pytest.mark.parametrize("line", ["---", "-----", "  ---  "])
    def test_divider(self, converter, line):
        assert converter.convert(line) == [build_divider()]

    def test_quote(self, converter):
        blocks = converter.convert("> wise words")
        assert _types(blocks) == ["quote"]
        assert _text(blocks[0]) == "wise words"

    def test_paragraph_keeps_whole_line(self, converter):
        assert converter.convert("  hello  ") == [
            build_text_block(BlockType.PARAGRAPH, "  hello  ")
        ]

    def test_blank_lines_skipped(self, converter):
        assert _types(converter.convert("a\n\n\nb")) == ["paragraph", "paragraph"]

    def test_blocks_never_exceed_lines(self, converter):
        md = "# a\n\n- b\n```\nc\nd\n```\n---\n> e\nf"
        assert len(converter.convert(md)) <= len(md.split("\n"))


class TestBlockShape:
    def test_block_envelope(self):
        block = build_text_block(BlockType.QUOTE, "q")
        assert block["object"] == "block"
        assert block["type"] == "quote"
        assert "rich_text" in block["quote"]

    def test_code_block_builder(self):
        block = build_code_block("x")
        assert block["code"]["language"] == "plain text"
        assert build_code_block("x", "rust")["code"]["language"] == "rust"

    def test_module_shortcut(self, converter):
        md = "# T\n- a"
        assert markdown_to_blocks(md) == converter.convert(md)
