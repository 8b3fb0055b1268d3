#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/shortcodes/builtin.py
"""Built-in shortcode definitions.

- ``ImageShortcode`` claims paragraphs that consist of a single image,
  turning them into editable image blocks.
- ``YamlShortcode`` is the generic fenced component: a YAML body parsed with
  PyYAML and a Jinja2 template for previews.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from mdbridge.constants import DEPS_JINJA, DEPS_YAML, IMAGE_SHORTCODE_PATTERN, ShortcodeLevel
from mdbridge.exceptions import ShortcodeError
from mdbridge.shortcodes.base import ShortcodeDefinition
from mdbridge.utils.decorators import requires_dependencies
from mdbridge.utils.escape import escape_html

logger = logging.getLogger(__name__)


class ImageShortcode(ShortcodeDefinition):
    """Block image written as a standalone ``![alt](src "title")`` paragraph.

    Values are ``{"image": src, "alt": alt, "title": title}``.

    Examples
    --------
        >>> ImageShortcode().parse('![a cat](cat.png "Cat")')
        {'image': 'cat.png', 'alt': 'a cat', 'title': 'Cat'}

    """

    name = "image"
    level: ShortcodeLevel = "block"
    pattern = IMAGE_SHORTCODE_PATTERN

    def parse(self, raw: str) -> dict[str, Any]:
        """Parse the literal image syntax."""
        match = self.pattern.match(raw.strip())
        if not match:
            raise ShortcodeError(f"Not an image: {raw!r}", shortcode_name=self.name)
        return {"image": match.group(2), "alt": match.group(1), "title": match.group(4) or ""}

    def serialize(self, values: dict[str, Any]) -> str:
        """Write the literal image syntax, omitting an empty title."""
        alt = values.get("alt") or ""
        src = values.get("image") or ""
        title = values.get("title") or ""
        title_part = f' "{title}"' if title else ""
        return f"![{alt}]({src}{title_part})"

    def render(self, values: dict[str, Any]) -> str:
        """Render an ``<img>`` element."""
        attributes = [
            f'src="{escape_html(values.get("image") or "")}"',
            f'alt="{escape_html(values.get("alt") or "")}"',
        ]
        if values.get("title"):
            attributes.append(f'title="{escape_html(values["title"])}"')
        return f"<img {' '.join(attributes)} />"


class YamlShortcode(ShortcodeDefinition):
    """Fenced component with a YAML body and a Jinja2 preview template.

    Parameters
    ----------
    name : str
        Tag name, written after ``:::``
    template : str
        Jinja2 template rendered with the parsed values as context
    level : {'block', 'inline'}, default = 'block'
        Placement of the component
    pattern : re.Pattern or str or None, default = None
        Optional literal syntax; for a match, the named groups become the
        values and ``literal`` formats them back

    Examples
    --------
        >>> youtube = YamlShortcode("youtube", '<iframe src="https://youtube.com/embed/{{ id }}"></iframe>')
        >>> youtube.parse("id: abc\\n")
        {'id': 'abc'}
        >>> youtube.serialize({"id": "abc"})
        'id: abc\\n'

    """

    def __init__(
        self,
        name: str,
        template: str,
        level: ShortcodeLevel = "block",
        pattern: "re.Pattern[str] | str | None" = None,
        literal: Optional[str] = None,
    ):
        """Initialize the definition."""
        self.name = name
        self.template = template
        self.level = level
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.literal = literal
        self._compiled_template: Any = None

    @requires_dependencies("shortcodes", DEPS_YAML)
    def parse(self, raw: str) -> dict[str, Any]:
        """Parse a YAML body, or a literal match into its named groups.

        Raises
        ------
        ShortcodeError
            If the body is not valid YAML or not a mapping

        """
        if self.pattern is not None:
            match = self.pattern.match(raw.strip())
            if match:
                return {key: value for key, value in match.groupdict().items() if value is not None}

        import yaml

        try:
            data = yaml.safe_load(raw) if raw.strip() else {}
        except yaml.YAMLError as e:
            raise ShortcodeError(
                f"Invalid YAML in '{self.name}' component", shortcode_name=self.name, original_error=e
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ShortcodeError(
                f"'{self.name}' component body must be a mapping, got {type(data).__name__}",
                shortcode_name=self.name,
            )
        return data

    @requires_dependencies("shortcodes", DEPS_YAML)
    def serialize(self, values: dict[str, Any]) -> str:
        """Write values as a YAML body (or through ``literal`` for pattern syntax)."""
        if self.literal is not None:
            return self.literal.format(**values)
        if not values:
            return ""

        import yaml

        return yaml.safe_dump(values, sort_keys=False, allow_unicode=True, default_flow_style=False)

    @requires_dependencies("shortcodes", DEPS_JINJA)
    def render(self, values: dict[str, Any]) -> str:
        """Render the preview template with HTML autoescaping.

        Raises
        ------
        ShortcodeError
            If the template fails to compile or render

        """
        from jinja2 import Environment, TemplateError

        try:
            if self._compiled_template is None:
                self._compiled_template = Environment(autoescape=True).from_string(self.template)
            return self._compiled_template.render(**values)
        except TemplateError as e:
            raise ShortcodeError(
                f"Failed to render '{self.name}' component", shortcode_name=self.name, original_error=e
            ) from e
