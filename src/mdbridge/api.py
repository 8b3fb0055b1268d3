#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/api.py
"""Top-level conversion entry points.

Every function here is pure and reentrant: parsers, transforms and
renderers are created per call and the only shared state is the
write-once default shortcode registry.

Pipelines
---------
- ``markdown_to_richdoc``: parse, normalize, wrap stray inline HTML, convert
- ``richdoc_to_markdown``: rebuild the syntax tree, escape, serialize
- ``markdown_to_html``: parse, normalize, render HTML
- ``html_to_richdoc``: parse pasted HTML, repair, normalize, convert

Examples
--------
    >>> from mdbridge import markdown_to_richdoc, richdoc_to_markdown
    >>> richdoc_to_markdown(markdown_to_richdoc("**a _b_ c**"))
    '**a** _**b**_ **c**'

"""

from __future__ import annotations

import logging
from typing import Any, Union

from mdbridge.ast.nodes import Document
from mdbridge.ast.visitors import ValidationVisitor
from mdbridge.exceptions import ValidationError
from mdbridge.options.html import HtmlParserOptions, HtmlRendererOptions
from mdbridge.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from mdbridge.parsers.html import HtmlToAstConverter
from mdbridge.parsers.markdown import MarkdownToAstConverter
from mdbridge.renderers.html import HtmlRenderer
from mdbridge.renderers.markdown import MarkdownRenderer
from mdbridge.richdoc.from_ast import ast_to_richdoc
from mdbridge.richdoc.nodes import RichDocument
from mdbridge.richdoc.to_ast import richdoc_to_ast
from mdbridge.shortcodes.base import ShortcodeLookup
from mdbridge.shortcodes.registry import resolve_shortcodes
from mdbridge.transforms.html_wrap import WrapHtmlTransform
from mdbridge.transforms.pipeline import html_import_normalizers, markdown_normalizers, run_transforms
from mdbridge.utils.decorators import debug_timer

logger = logging.getLogger(__name__)


def markdown_to_ast(text: str, options: MarkdownParserOptions | None = None) -> Document:
    """Parse Markdown into a raw syntax tree.

    No normalizers run: references, images and encoded components are left
    as the parser produced them.

    Parameters
    ----------
    text : str
        Markdown source
    options : MarkdownParserOptions or None, default = None
        Parsing options

    Returns
    -------
    Document
        Syntax tree

    Raises
    ------
    ValidationError
        If ``text`` is not a string
    InvalidOptionsError
        If ``options`` is not a ``MarkdownParserOptions``

    """
    with debug_timer(logger, "Parsing (markdown)"):
        return MarkdownToAstConverter(options).parse(text)


def _parse_and_normalize(
    text: str, shortcodes: ShortcodeLookup, options: MarkdownParserOptions | None
) -> Document:
    document = markdown_to_ast(text, options)
    with debug_timer(logger, "Normalizing (markdown)"):
        return run_transforms(document, markdown_normalizers(shortcodes))


def ast_to_markdown(
    document: Document | None,
    shortcodes: ShortcodeLookup | None = None,
    options: MarkdownRendererOptions | None = None,
) -> str:
    """Serialize a syntax tree to Markdown.

    Parameters
    ----------
    document : Document or None
        Syntax tree; None serializes to an empty string
    shortcodes : ShortcodeLookup or None, default = None
        Definitions used to write components
    options : MarkdownRendererOptions or None, default = None
        Rendering options

    Returns
    -------
    str
        Markdown text without trailing whitespace

    """
    with debug_timer(logger, "Rendering (markdown)"):
        return MarkdownRenderer(options, resolve_shortcodes(shortcodes)).render_to_string(document)


def markdown_to_richdoc(
    text: str,
    shortcodes: ShortcodeLookup | None = None,
    options: MarkdownParserOptions | None = None,
    as_dict: bool = False,
) -> Union[RichDocument, dict[str, Any]]:
    """Convert Markdown to a rich document.

    Parameters
    ----------
    text : str
        Markdown source
    shortcodes : ShortcodeLookup or None, default = None
        Component definitions; None uses ``default_shortcodes()``
    options : MarkdownParserOptions or None, default = None
        Parsing options
    as_dict : bool, default = False
        Return the JSON-ready dict instead of a ``RichDocument``

    Returns
    -------
    RichDocument or dict
        Normalized rich document

    Examples
    --------
        >>> doc = markdown_to_richdoc("_`a`_", as_dict=True)
        >>> doc["nodes"][0]["nodes"][0]["leaves"][0]["marks"]
        [{'type': 'code'}, {'type': 'italic'}]

    """
    lookup = resolve_shortcodes(shortcodes)
    document = _parse_and_normalize(text, lookup, options)
    document = run_transforms(document, [WrapHtmlTransform()])

    with debug_timer(logger, "Converting (syntax tree to rich document)"):
        richdoc = ast_to_richdoc(document, lookup)
    return richdoc.to_dict() if as_dict else richdoc


def richdoc_to_markdown(
    document: Union[RichDocument, dict[str, Any]],
    shortcodes: ShortcodeLookup | None = None,
    options: MarkdownRendererOptions | None = None,
) -> str:
    """Convert a rich document to Markdown.

    Parameters
    ----------
    document : RichDocument or dict
        Rich document, or its dict form as produced by ``to_dict`` or an
        editor (``{"kind": "block", "type": "root", ...}`` is accepted)
    shortcodes : ShortcodeLookup or None, default = None
        Component definitions; None uses ``default_shortcodes()``
    options : MarkdownRendererOptions or None, default = None
        Rendering options

    Returns
    -------
    str
        Markdown text

    Raises
    ------
    ValidationError
        If the document is malformed or has an unknown node type
    ShortcodeError
        If the document holds a component with no definition

    Examples
    --------
        >>> richdoc_to_markdown({"kind": "block", "type": "root", "nodes": [
        ...     {"kind": "block", "type": "paragraph", "nodes": [
        ...         {"kind": "text", "leaves": [{"text": "foo"}, {"text": " bar", "marks": ["bold"]}]},
        ...     ]},
        ... ]})
        'foo **bar**'

    """
    if isinstance(document, dict):
        document = RichDocument.from_dict(document)
    elif not isinstance(document, RichDocument):
        raise ValidationError(
            f"Expected a RichDocument or dict, got {type(document).__name__}",
            parameter_name="document",
            parameter_value=document,
        )

    lookup = resolve_shortcodes(shortcodes)
    with debug_timer(logger, "Converting (rich document to syntax tree)"):
        tree = richdoc_to_ast(document, lookup)
    return ast_to_markdown(tree, lookup, options)


def markdown_to_html(
    text: str,
    shortcodes: ShortcodeLookup | None = None,
    options: HtmlRendererOptions | None = None,
    *,
    parser_options: MarkdownParserOptions | None = None,
) -> str:
    """Render Markdown as an HTML fragment.

    Parameters
    ----------
    text : str
        Markdown source
    shortcodes : ShortcodeLookup or None, default = None
        Definitions whose ``render`` expands components
    options : HtmlRendererOptions or None, default = None
        HTML rendering options
    parser_options : MarkdownParserOptions or None, default = None
        Markdown parsing options

    Returns
    -------
    str
        HTML fragment

    Examples
    --------
        >>> markdown_to_html("**a** <kbd>b</kbd>")
        '<p><strong>a</strong> <kbd>b</kbd></p>'

    """
    lookup = resolve_shortcodes(shortcodes)
    document = _parse_and_normalize(text, lookup, parser_options)
    with debug_timer(logger, "Rendering (html)"):
        return HtmlRenderer(options, lookup).render_to_string(document)


def html_to_richdoc(
    html: str,
    shortcodes: ShortcodeLookup | None = None,
    options: HtmlParserOptions | None = None,
    as_dict: bool = False,
) -> Union[RichDocument, dict[str, Any]]:
    """Convert pasted HTML to a rich document.

    Block elements nested inside inline ones are split out, link padding
    is moved outside links and paper emoji images become their character.

    Parameters
    ----------
    html : str
        HTML fragment
    shortcodes : ShortcodeLookup or None, default = None
        Component definitions; None uses ``default_shortcodes()``
    options : HtmlParserOptions or None, default = None
        HTML parsing options
    as_dict : bool, default = False
        Return the JSON-ready dict instead of a ``RichDocument``

    Returns
    -------
    RichDocument or dict
        Normalized rich document

    Raises
    ------
    DependencyError
        If BeautifulSoup (or the selected parser backend) is not installed

    """
    lookup = resolve_shortcodes(shortcodes)
    with debug_timer(logger, "Parsing (html)"):
        document = HtmlToAstConverter(options).parse(html)
    with debug_timer(logger, "Normalizing (html)"):
        document = run_transforms(document, html_import_normalizers(lookup))

    validator = ValidationVisitor(strict=False)
    document.accept(validator)
    for problem in validator.errors:
        logger.warning("Pasted HTML left a malformed tree: %s", problem)

    with debug_timer(logger, "Converting (syntax tree to rich document)"):
        richdoc = ast_to_richdoc(document, lookup)
    return richdoc.to_dict() if as_dict else richdoc
