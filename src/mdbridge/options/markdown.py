#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing and rendering.

The Markdown output style (markers, bullets, fences) is fixed in
``mdbridge.constants``; these options only toggle pipeline stages.
"""
# src/mdbridge/options/markdown.py

from __future__ import annotations

from dataclasses import dataclass, field

from mdbridge.constants import (
    DEFAULT_DISABLED_INLINE_RULES,
    DEFAULT_PARSE_STRIKETHROUGH,
    DEFAULT_PARSE_TABLES,
)
from mdbridge.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).
    parse_tables : bool, default True
        Whether to parse table syntax (GFM pipe tables).
    disabled_inline_rules : tuple of str, default ("url_link",)
        Inline tokenizer rules removed from the parser before use.
    encode_component_blocks : bool, default True
        Whether ``:::`` component blocks are protected from the block grammar
        before parsing.

    """

    parse_strikethrough: bool = field(
        default=DEFAULT_PARSE_STRIKETHROUGH,
        metadata={"help": "Parse strikethrough syntax (~~text~~)", "importance": "core"},
    )
    parse_tables: bool = field(
        default=DEFAULT_PARSE_TABLES,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "importance": "core"},
    )
    disabled_inline_rules: tuple[str, ...] = field(
        default=DEFAULT_DISABLED_INLINE_RULES,
        metadata={"help": "Inline parser rules to disable (bare URL autolinking by default)", "importance": "advanced"},
    )
    encode_component_blocks: bool = field(
        default=True,
        metadata={"help": "Encode ::: component blocks before parsing", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If ``disabled_inline_rules`` is not a tuple of strings.

        """
        if isinstance(self.disabled_inline_rules, str):
            raise ValueError("disabled_inline_rules must be a sequence of rule names, not a string")
        if not all(isinstance(name, str) for name in self.disabled_inline_rules):
            raise ValueError(f"disabled_inline_rules must contain only strings, got {self.disabled_inline_rules!r}")
        # Lists are accepted and frozen to keep the options hashable
        object.__setattr__(self, "disabled_inline_rules", tuple(self.disabled_inline_rules))


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-Markdown rendering.

    Parameters
    ----------
    escape_special : bool, default True
        Whether paired Markdown delimiters and line-start block markers in
        text are backslash-escaped before stringification.
    strip_trailing_breaks : bool, default True
        Whether hard line breaks at the end of a paragraph are removed.

    """

    escape_special: bool = field(
        default=True,
        metadata={"help": "Escape markdown-significant characters in text", "importance": "core"},
    )
    strip_trailing_breaks: bool = field(
        default=True,
        metadata={"help": "Remove hard line breaks that end a block", "importance": "advanced"},
    )
