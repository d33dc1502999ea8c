# topmark:header:start
#
#   project      : PagePress
#   file         : entities.py
#   file_relpath : src/pagepress/text/entities.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Character-entity encoding.

The entity table is the HTML 4 set shipped with the standard library
(`html.entities.codepoint2name`). Two encodings are offered:

* `encode_named`: named entity where one exists, hexadecimal reference otherwise.
* `to_numeric_entities`: rewrite named entities to decimal references, for XML
  documents where only the five predefined XML entities are declared.

Raw ``&``, ``<`` and ``>`` are markup and pass through untouched; authors write
``\\&``, ``\\<`` and ``\\>`` (and ``\\ `` for a non-breaking space) to get the
escaped forms, see `apply_escapes`.
"""

from __future__ import annotations

import re
import unicodedata
from html.entities import codepoint2name, name2codepoint
from typing import Final

# Printable ASCII plus line structure.
_UNSAFE_RE: Final[re.Pattern[str]] = re.compile(r"[^\x20-\x7e\n\r\t]")

_ENTITY_RE: Final[re.Pattern[str]] = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")

# Declared by XML itself.
XML_PREDEFINED: Final[frozenset[str]] = frozenset({"amp", "lt", "gt", "quot", "apos"})

_ESCAPES: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"\\ "), "&nbsp;"),
    (re.compile(r"\\&"), "&amp;"),
    (re.compile(r"\\<"), "&lt;"),
    (re.compile(r"\\>"), "&gt;"),
    (re.compile(r"(?<=\s)&(?=\s)"), "&amp;"),
)


def entity_for(char: str) -> str:
    """Return the named entity for ``char``, or its hexadecimal reference."""
    codepoint: int = ord(char)
    name: str | None = codepoint2name.get(codepoint)
    if name is not None:
        return f"&{name};"
    return f"&#x{codepoint:X};"


def encode_named(text: str) -> str:
    """Replace every character outside printable ASCII by an entity.

    The buffer is first normalized (canonical decomposition then composition)
    so that combining sequences such as ``e`` + U+0301 map to one entity.
    """
    normalized: str = unicodedata.normalize("NFC", unicodedata.normalize("NFD", text))
    return _UNSAFE_RE.sub(lambda m: entity_for(m.group(0)), normalized)


def apply_escapes(text: str) -> str:
    """Turn backslash escapes into entities and isolate stray ampersands.

    ``\\ `` becomes ``&nbsp;``, ``\\&``/``\\<``/``\\>`` become ``&amp;``/``&lt;``/``&gt;``,
    and an ``&`` with whitespace on both sides becomes ``&amp;``.
    """
    for pattern, replacement in _ESCAPES:
        text = pattern.sub(replacement, text)
    return text


def to_numeric_entities(text: str) -> str:
    """Rewrite named entities (other than the XML predefined ones) as ``&#N;``.

    Unknown names are left untouched.
    """

    def _numeric(match: re.Match[str]) -> str:
        name: str = match.group(1)
        if name in XML_PREDEFINED or name not in name2codepoint:
            return match.group(0)
        return f"&#{name2codepoint[name]};"

    return _ENTITY_RE.sub(_numeric, text)


def encode_numeric(text: str) -> str:
    """Encode like `encode_named`, then convert the result to numeric references."""
    return to_numeric_entities(encode_named(text))
