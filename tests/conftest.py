"""Shared test fixtures for the noty test suite."""

from __future__ import annotations

import pytest

from noty.config import NotyConfig
from noty.converter.md_to_notion import MarkdownToNotionConverter
from noty.converter.notion_to_md import NotionToMarkdownRenderer


@pytest.fixture
def config() -> NotyConfig:
    """Test configuration with a dummy token and no backoff delay."""
    return NotyConfig(
        token="test_token_1234",
        retry_base_delay=0.0,
        retry_max_delay=0.0,
    )


@pytest.fixture
def converter() -> MarkdownToNotionConverter:
    """Markdown-to-Notion converter."""
    return MarkdownToNotionConverter()


@pytest.fixture
def renderer() -> NotionToMarkdownRenderer:
    """Notion-to-Markdown renderer."""
    return NotionToMarkdownRenderer()
