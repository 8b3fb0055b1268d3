#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/utils/components.py
"""Text-level encoding of ``:::`` component blocks.

A component block spans several lines and carries a YAML body::

    ::: callout
    kind: warning
    :::

The generic block grammar would split such a block into paragraphs, lists
and whatever else the body happens to look like. Before parsing, each block
is therefore collapsed into a single line ``::: callout a2luZDogd2FybmluZwo=``
(the body base64-encoded), and after serialization the single line is
expanded back. The encoded form exists only inside Markdown strings and
never in a syntax tree.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re

from mdbridge.constants import (
    COMPONENT_BLOCK_PATTERN,
    EMPTY_COMPONENT_PAYLOAD,
    ENCODED_COMPONENT_LINE_PATTERN,
)

logger = logging.getLogger(__name__)


def encode_component_payload(body: str) -> str:
    """Encode a component body for the single-line form.

    Parameters
    ----------
    body : str
        Raw component body (YAML text, usually newline-terminated)

    Returns
    -------
    str
        Base64 payload, or ``EMPTY_COMPONENT_PAYLOAD`` for an empty body

    """
    if not body:
        return EMPTY_COMPONENT_PAYLOAD
    return base64.b64encode(body.encode("utf-8")).decode("ascii")


def decode_component_payload(payload: str) -> str | None:
    """Decode a single-line payload back to the component body.

    Parameters
    ----------
    payload : str
        Payload produced by ``encode_component_payload``

    Returns
    -------
    str or None
        Decoded body, or None if the payload is not valid base64 UTF-8

    """
    if payload in ("", EMPTY_COMPONENT_PAYLOAD):
        return ""
    try:
        return base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None


def encode_component_blocks(text: str) -> str:
    """Collapse every ``:::`` component block into its single-line form.

    A block without a closing ``:::`` line is left untouched.

    Parameters
    ----------
    text : str
        Markdown source

    Returns
    -------
    str
        Markdown with component blocks encoded

    Examples
    --------
    >>> encode_component_blocks("::: note\\nbody\\n:::\\n")
    '::: note Ym9keQo=\\n'

    """

    def _encode(match: re.Match[str]) -> str:
        name, body, terminator = match.group(1), match.group(2) or "", match.group(3)
        return f"::: {name} {encode_component_payload(body)}{terminator}"

    return COMPONENT_BLOCK_PATTERN.sub(_encode, text)


def decode_component_blocks(text: str) -> str:
    """Expand every single-line encoded component back to block form.

    Lines whose payload does not decode are left as they are.

    Parameters
    ----------
    text : str
        Markdown containing encoded component lines

    Returns
    -------
    str
        Markdown with component blocks restored

    """

    def _decode(match: re.Match[str]) -> str:
        name, payload = match.group(1), match.group(2)
        body = decode_component_payload(payload)
        if body is None:
            logger.debug("Leaving undecodable component line for '%s' as text", name)
            return match.group(0)
        if body and not body.endswith("\n"):
            body += "\n"
        return f"::: {name}\n{body}:::"

    return ENCODED_COMPONENT_LINE_PATTERN.sub(_decode, text)
