#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/options/test_option_classes.py
"""Unit tests for the frozen parser and renderer option classes."""

from dataclasses import FrozenInstanceError

import pytest

from mdbridge.options import (
    HtmlParserOptions,
    HtmlRendererOptions,
    MarkdownParserOptions,
    MarkdownRendererOptions,
)


@pytest.mark.unit
class TestMarkdownParserOptions:
    """Test Markdown parser options."""

    def test_defaults(self):
        options = MarkdownParserOptions()
        assert options.parse_strikethrough
        assert options.parse_tables
        assert options.disabled_inline_rules == ("url_link",)
        assert options.encode_component_blocks

    def test_list_converted_to_tuple(self):
        options = MarkdownParserOptions(disabled_inline_rules=["url_link", "inline_html"])
        assert options.disabled_inline_rules == ("url_link", "inline_html")
        assert hash(options) == hash(MarkdownParserOptions(disabled_inline_rules=("url_link", "inline_html")))

    def test_string_rejected(self):
        with pytest.raises(ValueError, match="not a string"):
            MarkdownParserOptions(disabled_inline_rules="url_link")

    def test_non_string_entries_rejected(self):
        with pytest.raises(ValueError):
            MarkdownParserOptions(disabled_inline_rules=("url_link", 3))

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            MarkdownParserOptions().parse_tables = False


@pytest.mark.unit
class TestCreateUpdated:
    """Test cloning with updated fields."""

    def test_create_updated(self):
        options = MarkdownRendererOptions()
        updated = options.create_updated(escape_special=False)
        assert updated.escape_special is False
        assert updated.strip_trailing_breaks is True
        assert options.escape_special is True

    def test_create_updated_runs_validation(self):
        with pytest.raises(ValueError):
            HtmlParserOptions().create_updated(parser="nope")

    def test_unknown_field(self):
        with pytest.raises(TypeError):
            HtmlRendererOptions().create_updated(no_such_field=True)


@pytest.mark.unit
class TestHtmlOptions:
    """Test HTML parser and renderer options."""

    def test_parser_defaults(self):
        options = HtmlParserOptions()
        assert options.parser == "html.parser"
        assert options.strip_comments
        assert options.convert_paper_emoji

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError, match="parser must be one of"):
            HtmlParserOptions(parser="regex")

    def test_renderer_defaults(self):
        options = HtmlRendererOptions()
        assert options.escape_html
        assert options.allow_dangerous_html
        assert options.render_components
