#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/shortcodes/test_builtin_shortcodes.py
"""Unit tests for the built-in shortcode definitions.

Tests cover:
- The image shortcode's literal syntax
- YAML bodies for fenced components
- Literal pattern syntax for custom components
- Jinja2 previews with autoescaping

"""

import pytest

from mdbridge.exceptions import ShortcodeError
from mdbridge.shortcodes import ImageShortcode, YamlShortcode


@pytest.mark.unit
class TestImageShortcode:
    """Test the block image component."""

    def test_parse_with_title(self):
        assert ImageShortcode().parse('![a cat](cat.png "Cat")') == {"image": "cat.png", "alt": "a cat", "title": "Cat"}

    def test_parse_without_title(self):
        assert ImageShortcode().parse("![a](b.png)") == {"image": "b.png", "alt": "a", "title": ""}

    def test_parse_rejects_other_text(self):
        with pytest.raises(ShortcodeError) as exc_info:
            ImageShortcode().parse("not an image")
        assert exc_info.value.shortcode_name == "image"

    def test_serialize(self):
        shortcode = ImageShortcode()
        assert shortcode.serialize({"image": "b.png", "alt": "a", "title": ""}) == "![a](b.png)"
        assert shortcode.serialize({"image": "b.png", "alt": "a", "title": "T"}) == '![a](b.png "T")'

    def test_render_escapes_attributes(self):
        html = ImageShortcode().render({"image": "a.png", "alt": '"x"'})
        assert html == '<img src="a.png" alt="&quot;x&quot;" />'

    def test_repr(self):
        assert repr(ImageShortcode()) == "ImageShortcode(name='image', level='block')"


@pytest.mark.unit
class TestYamlShortcode:
    """Test the generic fenced component."""

    def test_parse_mapping(self):
        shortcode = YamlShortcode("youtube", "")
        assert shortcode.parse("id: abc\nstart: 30\n") == {"id": "abc", "start": 30}

    def test_parse_empty_body(self):
        shortcode = YamlShortcode("youtube", "")
        assert shortcode.parse("") == {}
        assert shortcode.parse("~\n") == {}

    def test_invalid_yaml(self):
        with pytest.raises(ShortcodeError) as exc_info:
            YamlShortcode("youtube", "").parse("a: [\n")
        assert exc_info.value.shortcode_name == "youtube"
        assert exc_info.value.original_error is not None

    def test_non_mapping_body(self):
        with pytest.raises(ShortcodeError, match="must be a mapping"):
            YamlShortcode("youtube", "").parse("- a\n- b\n")

    def test_serialize_keeps_key_order(self):
        shortcode = YamlShortcode("youtube", "")
        assert shortcode.serialize({"id": "abc", "start": 30}) == "id: abc\nstart: 30\n"

    def test_serialize_empty(self):
        assert YamlShortcode("youtube", "").serialize({}) == ""

    def test_render_autoescapes(self):
        shortcode = YamlShortcode("callout", '<aside class="{{ kind }}">{{ text }}</aside>')
        html = shortcode.render({"kind": "note", "text": "<b>hi</b>"})
        assert html == '<aside class="note">&lt;b&gt;hi&lt;/b&gt;</aside>'

    def test_render_template_error(self):
        with pytest.raises(ShortcodeError) as exc_info:
            YamlShortcode("broken", "{% if %}").render({})
        assert exc_info.value.shortcode_name == "broken"

    def test_inline_level(self):
        assert YamlShortcode("mention", "", level="inline").level == "inline"


@pytest.mark.unit
class TestPatternShortcode:
    """Test custom components with a literal syntax."""

    @pytest.fixture
    def tweet(self):
        return YamlShortcode(
            "tweet",
            '<blockquote data-tweet="{{ id }}"></blockquote>',
            pattern=r"^@tweet\((?P<id>\d+)\)$",
            literal="@tweet({id})",
        )

    def test_pattern_compiled_from_string(self, tweet):
        assert tweet.pattern.match("@tweet(1)")

    def test_parse_literal(self, tweet):
        assert tweet.parse("@tweet(42)") == {"id": "42"}

    def test_parse_falls_back_to_yaml(self, tweet):
        assert tweet.parse("id: '7'\n") == {"id": "7"}

    def test_serialize_literal(self, tweet):
        assert tweet.serialize({"id": "42"}) == "@tweet(42)"

    def test_render(self, tweet):
        assert tweet.render({"id": "42"}) == '<blockquote data-tweet="42"></blockquote>'
