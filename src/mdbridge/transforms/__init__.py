#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/__init__.py
"""Normalizing passes over the syntax tree.

Every pass is a ``NodeTransformer`` and can be applied alone or through
``run_transforms`` with one of the chains from ``pipeline``.
"""

from __future__ import annotations

from mdbridge.transforms.breaks import StripTrailingBreaksTransform, strip_trailing_breaks
from mdbridge.transforms.emoji import PaperEmojiFilter
from mdbridge.transforms.escape import EscapeMarkdownTransform
from mdbridge.transforms.html_wrap import WrapHtmlTransform
from mdbridge.transforms.images import ImagesToTextTransform, image_source
from mdbridge.transforms.links import PaddedLinksTransform
from mdbridge.transforms.parents import AssertParentsTransform
from mdbridge.transforms.pipeline import (
    html_import_normalizers,
    markdown_normalizers,
    run_transforms,
    serialize_passes,
)
from mdbridge.transforms.references import SquashReferencesTransform, normalize_reference_label
from mdbridge.transforms.shortcodes import ResolveShortcodesTransform

__all__ = [
    "AssertParentsTransform",
    "EscapeMarkdownTransform",
    "ImagesToTextTransform",
    "PaddedLinksTransform",
    "PaperEmojiFilter",
    "ResolveShortcodesTransform",
    "SquashReferencesTransform",
    "StripTrailingBreaksTransform",
    "WrapHtmlTransform",
    "html_import_normalizers",
    "image_source",
    "markdown_normalizers",
    "normalize_reference_label",
    "run_transforms",
    "serialize_passes",
    "strip_trailing_breaks",
]
