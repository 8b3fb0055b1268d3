#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/pipeline.py
"""Ordered pass lists and the runner that applies them.

Three chains exist:

- ``markdown_normalizers``: after parsing Markdown
- ``html_import_normalizers``: after converting pasted HTML
- ``serialize_passes``: right before writing Markdown

Examples
--------
    >>> from mdbridge.parsers.markdown import markdown_to_ast
    >>> doc = markdown_to_ast("[a][1]\\n\\n[1]: /x")
    >>> doc = run_transforms(doc, markdown_normalizers())

"""

from __future__ import annotations

import logging
from typing import Iterable

from mdbridge.ast.nodes import Document
from mdbridge.ast.transforms import NodeTransformer
from mdbridge.exceptions import TransformError
from mdbridge.options.markdown import MarkdownRendererOptions
from mdbridge.shortcodes.base import ShortcodeLookup
from mdbridge.transforms.breaks import StripTrailingBreaksTransform
from mdbridge.transforms.escape import EscapeMarkdownTransform
from mdbridge.transforms.html_wrap import WrapHtmlTransform
from mdbridge.transforms.images import ImagesToTextTransform
from mdbridge.transforms.links import PaddedLinksTransform
from mdbridge.transforms.parents import AssertParentsTransform
from mdbridge.transforms.references import SquashReferencesTransform
from mdbridge.transforms.shortcodes import ResolveShortcodesTransform

logger = logging.getLogger(__name__)


def markdown_normalizers(shortcodes: ShortcodeLookup | None = None) -> list[NodeTransformer]:
    """Return the passes applied to every freshly parsed Markdown tree."""
    return [
        SquashReferencesTransform(),
        ImagesToTextTransform(),
        ResolveShortcodesTransform(shortcodes),
    ]


def html_import_normalizers(shortcodes: ShortcodeLookup | None = None) -> list[NodeTransformer]:
    """Return the passes applied to a tree converted from pasted HTML."""
    return [
        AssertParentsTransform(),
        PaddedLinksTransform(),
        ImagesToTextTransform(),
        ResolveShortcodesTransform(shortcodes),
        WrapHtmlTransform(),
    ]


def serialize_passes(options: MarkdownRendererOptions | None = None) -> list[NodeTransformer]:
    """Return the passes applied before Markdown serialization.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Renderer options selecting which passes run

    """
    options = options or MarkdownRendererOptions()
    passes: list[NodeTransformer] = []
    if options.escape_special:
        passes.append(EscapeMarkdownTransform())
    if options.strip_trailing_breaks:
        passes.append(StripTrailingBreaksTransform())
    return passes


def run_transforms(document: Document, transforms: Iterable[NodeTransformer]) -> Document:
    """Apply transforms in order.

    Parameters
    ----------
    document : Document
        Document to transform
    transforms : iterable of NodeTransformer
        Passes, applied first to last

    Returns
    -------
    Document
        The transformed document

    Raises
    ------
    TransformError
        If a pass returns something other than a Document

    """
    result = document
    for transformer in transforms:
        name = transformer.__class__.__name__
        logger.debug("Applying transform: %s", name)
        try:
            transformed = transformer.transform(result)
        except Exception as e:
            logger.error("Transform %s failed: %s", name, e, exc_info=True)
            raise

        if not isinstance(transformed, Document):
            raise TransformError(
                f"Transform {name} must return Document, got {type(transformed).__name__}",
                transform_name=name,
            )
        result = transformed
    return result
