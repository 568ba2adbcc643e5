"""Normalise embedded HTML documentation into canonical Markdown.

Service models carry documentation as HTML fragments (``<p>``, ``<code>``,
``<a href>``, ...). :func:`to_markdown` converts those fragments with
`markdownify <https://github.com/matthewwithanm/python-markdownify>`_ and then
canonicalises whitespace.

The function is total and idempotent:

* Text without any unescaped tag or entity is already plain, so only its
  whitespace is canonicalised.
* Converted output has any literal ``<tag>`` or ``&entity;`` (produced by
  entity decoding, e.g. ``&lt;p&gt;``) backslash-escaped, so a second pass
  sees plain text and leaves it alone.
* Code spans and fenced blocks are left untouched by both the markup check
  and the escaping, since a backslash between backticks is shown literally.
* If the converter itself fails, tags are stripped and entities unescaped
  instead; a warning is logged and no exception escapes.
"""

from __future__ import annotations

import html
import logging
import re

from markdownify import ATX, BACKSLASH, markdownify

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"(?<!\\)<[A-Za-z/!?][^<>]*>")
_ENTITY_RE = re.compile(r"(?<!\\)&(?:#[0-9]+|#[xX][0-9A-Fa-f]+|[A-Za-z][A-Za-z0-9]*);")
_BLANK_RUN_RE = re.compile(r"\n{3,}")
# A run of backticks up to the next run of the same length: inline spans and
# fenced blocks alike.
_CODE_SPAN_RE = re.compile(r"(`+)(?!`).*?(?<!`)\1(?!`)", re.DOTALL)

_CONVERTER_OPTIONS = {
    "heading_style": ATX,
    "bullets": "-",
    "newline_style": BACKSLASH,
    "escape_asterisks": False,
    "escape_underscores": False,
    "escape_misc": False,
}


def has_markup(text: str) -> bool:
    """Return True if *text* has an unescaped HTML tag or entity outside code spans."""
    return any(
        _TAG_RE.search(segment) or _ENTITY_RE.search(segment)
        for segment, is_code in _split_code(text)
        if not is_code
    )


def to_markdown(text: str) -> str:
    """Convert HTML-bearing documentation into canonical Markdown.

    Args:
        text: Documentation that may contain HTML markup, or plain text.

    Returns:
        Canonical Markdown. ``to_markdown(to_markdown(x)) == to_markdown(x)``
        holds for any input.

    Example::

        >>> to_markdown("<p>Creates a <code>Function</code>.</p>")
        'Creates a `Function`.'
    """
    if not has_markup(text):
        return _canonical_whitespace(text)

    try:
        converted = markdownify(text, **_CONVERTER_OPTIONS)
    except Exception as exc:
        logger.warning("Markup conversion failed, falling back to plain text: %s", exc)
        converted = html.unescape(_TAG_RE.sub(" ", text))

    return _canonical_whitespace(_escape_literal_markup(converted))


def _escape_literal_markup(text: str) -> str:
    """Backslash-escape tag and entity look-alikes left outside code spans.

    A backslash inside backticks is literal in Markdown, so code is kept as is.
    """
    return "".join(
        segment if is_code else _escape_segment(segment)
        for segment, is_code in _split_code(text)
    )


def _escape_segment(text: str) -> str:
    text = _TAG_RE.sub(lambda m: "\\" + m.group(0), text)
    return _ENTITY_RE.sub(lambda m: "\\" + m.group(0), text)


def _split_code(text: str) -> list[tuple[str, bool]]:
    """Split *text* into ``(segment, is_code)`` pairs around code spans."""
    segments: list[tuple[str, bool]] = []
    position = 0
    for match in _CODE_SPAN_RE.finditer(text):
        segments.append((text[position : match.start()], False))
        segments.append((match.group(0), True))
        position = match.end()
    segments.append((text[position:], False))
    return segments


def _canonical_whitespace(text: str) -> str:
    """Strip trailing spaces per line, collapse blank runs, trim the ends."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    joined = "\n".join(line.rstrip() for line in lines)
    return _BLANK_RUN_RE.sub("\n\n", joined).strip()
