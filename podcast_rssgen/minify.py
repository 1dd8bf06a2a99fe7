"""Whitespace collapsing for generated feeds."""

from __future__ import annotations

import re

# Whitespace right after a tag, unless it starts with a plain space.
_BETWEEN_TAGS = re.compile(r">(?! )\s+")
# Whitespace runs ending in at least two spaces right before a tag.
_LINE_BREAKS = re.compile(r"([\n\s])+?(?<= {2})<")


def minify(text: str) -> str:
    """Collapse indentation and line breaks between tags.

    This is a two-pass text substitution, not an XML-aware rewrite, so
    attribute values containing ``>`` or runs of spaces may be altered.
    """
    text = _BETWEEN_TAGS.sub(">", text)
    text = _LINE_BREAKS.sub("<", text)
    return text.strip()
