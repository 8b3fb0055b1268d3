#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/utils/escape.py
"""Text escaping utilities for Markdown and HTML output.

Markdown escaping is deliberately narrow: only delimiter runs that would
actually pair up into emphasis, strikethrough, code or a link are escaped,
so that ordinary prose such as ``snake_case`` or a lone ``*`` is written
back unchanged. Literal backslashes are always doubled.

"""

from __future__ import annotations

import html
import re

# Each pattern captures the opening delimiter run and, where present, the closing one
_PAIRED_DELIMITER_PATTERNS = (
    re.compile(r"(\*+)[^*]*(\1)"),
    re.compile(r"(_)[^_]+(_)\b"),
    re.compile(r"(_{2,})[^_]*(\1)"),
    re.compile(r"(~+)[^~]*(\1)"),
    re.compile(r"(`+)[^`]*(\1)"),
    re.compile(r"(\[)(?!\^)[^\]]*\]"),
)

# Raw HTML spans inside text that must be left alone
_HTML_SPAN_PATTERN = re.compile(
    r"<(pre|style|script)\b[^>]*>[\s\S]*?</\1\s*>|</?[A-Za-z][^<>]*>",
    re.IGNORECASE,
)

_BLOCK_MARKER_PATTERNS = (
    (re.compile(r"^(#{1,6})(?=[ \t]|$)"), lambda m: "\\" + m.group(1)),
    (re.compile(r"^>"), lambda m: "\\>"),
    (re.compile(r"^([-+*])(?=[ \t])"), lambda m: "\\" + m.group(1)),
    (re.compile(r"^([-=*])(?=(?:[ \t]*\1)*[ \t]*$)"), lambda m: "\\" + m.group(1)),
    (re.compile(r"^_(?=(?:[ \t]*_){2,}[ \t]*$)"), lambda m: "\\_"),
    (re.compile(r"^(\d{1,9})([.)])(?=[ \t]|$)"), lambda m: m.group(1) + "\\" + m.group(2)),
)


def _escape_delimiter(delimiter: str) -> str:
    return "".join("\\" + char for char in delimiter)


def _escape_paired_delimiters(text: str) -> str:
    text = text.replace("\\", "\\\\")
    for pattern in _PAIRED_DELIMITER_PATTERNS:

        def _replace(match: re.Match[str]) -> str:
            whole = match.group(0)
            start = match.group(1)
            end = match.group(2) if pattern.groups > 1 else None
            body_end = len(whole) - len(end) if end else len(whole)
            body = whole[len(start) : body_end]
            return _escape_delimiter(start) + body + (_escape_delimiter(end) if end else "")

        text = pattern.sub(_replace, text)
    return text


def escape_markdown(text: str) -> str:
    r"""Escape paired Markdown delimiters in a text value.

    HTML tags and ``<pre>``, ``<style>`` and ``<script>`` blocks embedded in
    the text are copied through untouched.

    Parameters
    ----------
    text : str
        Text node value

    Returns
    -------
    str
        Text with backslashes doubled and delimiter pairs backslash-escaped

    Examples
    --------
        >>> escape_markdown("a *b* c")
        'a \\*b\\* c'
        >>> escape_markdown("snake_case and a lone *")
        'snake_case and a lone *'
        >>> escape_markdown("<span>*x*</span>")
        '<span>\\*x\\*</span>'

    """
    if not text:
        return text

    parts: list[str] = []
    position = 0
    for match in _HTML_SPAN_PATTERN.finditer(text):
        parts.append(_escape_paired_delimiters(text[position : match.start()]))
        parts.append(match.group(0))
        position = match.end()
    parts.append(_escape_paired_delimiters(text[position:]))
    return "".join(parts)


def escape_block_markers(text: str, at_line_start: bool = True) -> str:
    r"""Escape characters that would start a block construct at a line start.

    Parameters
    ----------
    text : str
        Text node value
    at_line_start : bool, default = True
        Whether the text begins at the start of a line in its paragraph

    Returns
    -------
    str
        Text with heading, quote, list, thematic break and setext underline
        markers escaped

    Examples
    --------
        >>> escape_block_markers("# not a heading")
        '\\# not a heading'
        >>> escape_block_markers("1986. A great year")
        '1986\\. A great year'

    """
    lines = text.split("\n")
    for index, line in enumerate(lines):
        if index == 0 and not at_line_start:
            continue
        for pattern, replacement in _BLOCK_MARKER_PATTERNS:
            line, count = pattern.subn(replacement, line, count=1)
            if count:
                break
        lines[index] = line
    return "\n".join(lines)


def escape_inline_code(code: str, delimiter: str = "`") -> tuple[str, str]:
    """Pick a code span delimiter and padding that preserve the code exactly.

    Parameters
    ----------
    code : str
        Code content
    delimiter : str, default = '`'
        Delimiter character

    Returns
    -------
    tuple[str, str]
        (padded_code, delimiter_run)

    Examples
    --------
        >>> escape_inline_code("simple code")
        ('simple code', '`')
        >>> escape_inline_code("code with ` backtick")
        ('code with ` backtick', '``')

    """
    longest = max((len(run) for run in re.findall(re.escape(delimiter) + "+", code)), default=0)
    final_delimiter = delimiter * (longest + 1)

    # A single leading and trailing space is stripped by parsers
    needs_padding = code.startswith(delimiter) or code.endswith(delimiter)
    if code.startswith(" ") and code.endswith(" ") and code.strip():
        needs_padding = True
    if needs_padding:
        code = " " + code + " "

    return code, final_delimiter


_TAG_START_PATTERN = re.compile(r"<(?=[A-Za-z/!?])")
_ENTITY_LIKE_PATTERN = re.compile(r"&(?=#\d+;|#[xX][0-9A-Fa-f]+;|[A-Za-z][A-Za-z0-9]*;)")


def protect_html_in_text(text: str) -> str:
    """Encode text taken from an HTML tree so Markdown keeps it literal.

    Decoded HTML text may contain ``<div>`` or ``&amp;``, which Markdown
    would read back as a tag or an entity. Only those two cases are
    encoded; a lone ``<`` or ``&`` is left as it is.

    Parameters
    ----------
    text : str
        Decoded text content

    Returns
    -------
    str
        Text safe to emit verbatim into Markdown

    Examples
    --------
        >>> protect_html_in_text("use <div> & &amp;")
        'use &lt;div> & &amp;amp;'

    """
    text = _ENTITY_LIKE_PATTERN.sub("&amp;", text)
    return _TAG_START_PATTERN.sub("&lt;", text)


def escape_html(text: str, quote: bool = True, keep_entities: bool = False) -> str:
    """Escape HTML special characters to entities.

    Parameters
    ----------
    text : str
        Text to escape
    quote : bool, default = True
        Whether quotes are escaped too (needed inside attribute values)
    keep_entities : bool, default = False
        Whether existing entity references such as ``&lt;`` are left intact,
        for Markdown text whose entities were never decoded

    Returns
    -------
    str
        Text with HTML entities

    Examples
    --------
        >>> escape_html("<b>&</b>")
        '&lt;b&gt;&amp;&lt;/b&gt;'
        >>> escape_html("&lt; & <", keep_entities=True)
        '&lt; &amp; &lt;'

    """
    if not text:
        return text
    if keep_entities:
        text = _ENTITY_LIKE_PATTERN.sub("\x00", text)
        return html.escape(text, quote=quote).replace("\x00", "&")
    return html.escape(text, quote=quote)
