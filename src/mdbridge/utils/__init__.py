#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/utils/__init__.py
"""Utility modules for the mdbridge package.

This package contains helpers for component block encoding, Markdown and
HTML escaping, optional dependency checks and debug timing.
"""

from mdbridge.utils.components import (
    decode_component_blocks,
    decode_component_payload,
    encode_component_blocks,
    encode_component_payload,
)
from mdbridge.utils.escape import escape_html, escape_markdown

__all__ = [
    "decode_component_blocks",
    "decode_component_payload",
    "encode_component_blocks",
    "encode_component_payload",
    "escape_html",
    "escape_markdown",
]
