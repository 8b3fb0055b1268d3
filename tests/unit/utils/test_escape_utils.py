#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_escape_utils.py
"""Unit tests for Markdown and HTML escaping helpers."""

import pytest

from mdbridge.utils.escape import (
    escape_block_markers,
    escape_html,
    escape_inline_code,
    escape_markdown,
    protect_html_in_text,
)


@pytest.mark.unit
class TestEscapeMarkdown:
    """Test escaping of paired delimiters."""

    def test_paired_asterisks(self) -> None:
        assert escape_markdown("a *b* c") == "a \\*b\\* c"

    def test_double_asterisks(self) -> None:
        assert escape_markdown("**b**") == "\\*\\*b\\*\\*"

    def test_strikethrough_and_code(self) -> None:
        assert escape_markdown("~~s~~ `c`") == "\\~\\~s\\~\\~ \\`c\\`"

    def test_link_bracket(self) -> None:
        assert escape_markdown("[x] y") == "\\[x] y"

    def test_footnote_bracket_untouched(self) -> None:
        assert escape_markdown("[^1]") == "[^1]"

    def test_lone_markers_untouched(self) -> None:
        assert escape_markdown("snake_case and a lone *") == "snake_case and a lone *"

    def test_html_tags_skipped(self) -> None:
        assert escape_markdown("<span>*x*</span>") == "<span>\\*x\\*</span>"

    def test_script_block_skipped(self) -> None:
        text = "<script>a *b* c</script>"
        assert escape_markdown(text) == text

    def test_backslash_doubled(self) -> None:
        assert escape_markdown("a\\b \\*") == "a\\\\b \\\\*"

    def test_empty(self) -> None:
        assert escape_markdown("") == ""


@pytest.mark.unit
class TestEscapeBlockMarkers:
    """Test escaping of line-start block markers."""

    def test_heading(self) -> None:
        assert escape_block_markers("# not a heading") == "\\# not a heading"

    def test_hash_without_space_untouched(self) -> None:
        assert escape_block_markers("#hashtag") == "#hashtag"

    def test_quote(self) -> None:
        assert escape_block_markers("> q") == "\\> q"

    def test_bullet(self) -> None:
        assert escape_block_markers("+ item") == "\\+ item"

    def test_ordered(self) -> None:
        assert escape_block_markers("1986. A great year") == "1986\\. A great year"

    @pytest.mark.parametrize("line", ["---", "- - -", "-", "***", "*", "===", "=", "__ _"])
    def test_thematic_break_and_setext_lines(self, line) -> None:
        assert escape_block_markers(line) == "\\" + line

    def test_short_underscore_run_untouched(self) -> None:
        assert escape_block_markers("__") == "__"

    def test_dashes_with_text_untouched(self) -> None:
        assert escape_block_markers("--a") == "--a"

    def test_only_line_starts(self) -> None:
        assert escape_block_markers("a # b\n# c") == "a # b\n\\# c"

    def test_first_line_mid_paragraph(self) -> None:
        assert escape_block_markers("# a\n# b", at_line_start=False) == "# a\n\\# b"


@pytest.mark.unit
class TestEscapeInlineCode:
    """Test code span delimiter selection."""

    def test_simple(self) -> None:
        assert escape_inline_code("simple code") == ("simple code", "`")

    def test_inner_backtick_run(self) -> None:
        assert escape_inline_code("a `` b") == ("a `` b", "```")

    def test_edge_backtick_padded(self) -> None:
        assert escape_inline_code("`a") == (" `a ", "``")

    def test_space_surrounded_padded(self) -> None:
        assert escape_inline_code(" a ") == ("  a  ", "`")

    def test_blank_not_padded(self) -> None:
        assert escape_inline_code("  ") == ("  ", "`")


@pytest.mark.unit
class TestHtmlEscaping:
    """Test HTML escaping helpers."""

    def test_escape_html(self) -> None:
        assert escape_html("<b>&</b>") == "&lt;b&gt;&amp;&lt;/b&gt;"

    def test_quotes(self) -> None:
        assert escape_html('"x"') == "&quot;x&quot;"
        assert escape_html('"x"', quote=False) == '"x"'

    def test_keep_entities(self) -> None:
        assert escape_html("&lt; & < &#38; &#x26;", keep_entities=True) == "&lt; &amp; &lt; &#38; &#x26;"

    def test_protect_html_in_text(self) -> None:
        assert protect_html_in_text("use <div> & &amp;") == "use &lt;div> & &amp;amp;"

    def test_protect_leaves_lone_angle(self) -> None:
        assert protect_html_in_text("a < b") == "a < b"
