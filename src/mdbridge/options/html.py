#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML rendering and pasted HTML import."""
# src/mdbridge/options/html.py

from __future__ import annotations

from dataclasses import dataclass, field

from mdbridge.constants import DEFAULT_HTML_PARSER
from mdbridge.options.base import BaseParserOptions, BaseRendererOptions

_SUPPORTED_HTML_PARSERS = ("html.parser", "lxml", "html5lib")


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-HTML rendering.

    Parameters
    ----------
    escape_html : bool, default True
        Whether text content is HTML-escaped.
    allow_dangerous_html : bool, default True
        Whether raw HTML nodes are passed through unchanged. When False they
        are emitted escaped, as visible text.
    render_components : bool, default True
        Whether component nodes are expanded through their shortcode
        definition's ``render``. When False an empty placeholder element
        carrying the component name is emitted.

    """

    escape_html: bool = field(
        default=True,
        metadata={"help": "Escape HTML special characters in text", "importance": "core"},
    )
    allow_dangerous_html: bool = field(
        default=True,
        metadata={"help": "Pass raw HTML through unchanged", "importance": "security"},
    )
    render_components: bool = field(
        default=True,
        metadata={"help": "Expand shortcode components into their rendered HTML", "importance": "core"},
    )


@dataclass(frozen=True)
class HtmlParserOptions(BaseParserOptions):
    """Configuration options for importing pasted HTML.

    Parameters
    ----------
    parser : {"html.parser", "lxml", "html5lib"}, default "html.parser"
        BeautifulSoup tree builder to use.
    strip_comments : bool, default True
        Whether HTML comments are dropped instead of kept as raw HTML.
    convert_paper_emoji : bool, default True
        Whether ``<img data-emoji-ch="X">`` elements become the text ``X``.

    """

    parser: str = field(
        default=DEFAULT_HTML_PARSER,
        metadata={
            "help": "BeautifulSoup parser backend",
            "choices": list(_SUPPORTED_HTML_PARSERS),
            "importance": "advanced",
        },
    )
    strip_comments: bool = field(
        default=True,
        metadata={"help": "Drop HTML comments", "importance": "core"},
    )
    convert_paper_emoji: bool = field(
        default=True,
        metadata={"help": "Replace emoji images with their character", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate the parser backend name.

        Raises
        ------
        ValueError
            If ``parser`` is not a supported BeautifulSoup backend.

        """
        if self.parser not in _SUPPORTED_HTML_PARSERS:
            raise ValueError(f"parser must be one of {_SUPPORTED_HTML_PARSERS}, got {self.parser!r}")
