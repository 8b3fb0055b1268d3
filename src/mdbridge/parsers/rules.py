#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/parsers/rules.py
"""Inline tokenizer guard for the mistune parser."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    import mistune

logger = logging.getLogger(__name__)


def remove_inline_rules(markdown: "mistune.Markdown", rule_names: Iterable[str]) -> list[str]:
    """Disable inline scanning rules on a mistune instance.

    Must be called before the instance parses anything: mistune compiles
    its scanner lazily from the rule list on first use.

    Parameters
    ----------
    markdown : mistune.Markdown
        Parser instance to modify in place
    rule_names : iterable of str
        Names of inline rules to remove (e.g. ``"url_link"``)

    Returns
    -------
    list of str
        Names that were actually removed

    """
    removed: list[str] = []
    for name in rule_names:
        if name in markdown.inline.rules:
            markdown.inline.rules.remove(name)
            removed.append(name)
        else:
            logger.debug("Inline rule '%s' is not active, nothing to remove", name)
    return removed
