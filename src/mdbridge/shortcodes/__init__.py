#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/shortcodes/__init__.py
"""Shortcode plugin interface, registry and built-in definitions."""

from mdbridge.shortcodes.base import ShortcodeDefinition, ShortcodeLookup
from mdbridge.shortcodes.builtin import ImageShortcode, YamlShortcode
from mdbridge.shortcodes.registry import ShortcodeRegistry, default_shortcodes, resolve_shortcodes

__all__ = [
    "ShortcodeDefinition",
    "ShortcodeLookup",
    "ShortcodeRegistry",
    "ImageShortcode",
    "YamlShortcode",
    "default_shortcodes",
    "resolve_shortcodes",
]
