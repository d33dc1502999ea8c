# topmark:header:start
#
#   project      : PagePress
#   file         : doctype.py
#   file_relpath : src/pagepress/pipeline/steps/doctype.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Doctype synthesis and XHTML fix-ups.

A ``<<doctype MODE>>`` token (MODE is ``strict``, ``transitional`` or
``frameset``) is replaced by the matching W3C declaration:

* XML documents, version 1.0: XHTML 1.0 (``xhtml1-<mode>.dtd``).
* XML documents, other versions: XHTML <version>, MODE is ignored.
* Everything else: HTML 4.01, where ``strict`` has no suffix and the
  ``transitional`` DTD is ``loose.dtd``.

XML documents additionally get namespace and language attributes on a bare
``<html>`` tag, ``application/xml`` instead of ``text/html`` content types, and
self-closing empty elements (``br``, ``hr``, ``link``, ``meta``, ``img``).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from pagepress.config.logging import get_logger
from pagepress.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument
    from pagepress.text.macros import MacroSyntax

logger: PagepressLogger = get_logger(__name__)

XHTML_NAMESPACE: Final[str] = "http://www.w3.org/1999/xhtml"

_XML_FIXUPS: Final[tuple[tuple[re.Pattern[str], str, int], ...]] = (
    # (pattern, replacement, count); count 0 replaces every match
    (
        re.compile(r"<html>", re.IGNORECASE),
        f'<html xmlns="{XHTML_NAMESPACE}" xml:lang="en" lang="en">',
        1,
    ),
    (
        re.compile(r"<html\s+([^\s=>]+)>", re.IGNORECASE),
        f'<html xmlns="{XHTML_NAMESPACE}" xml:lang="\\1" lang="\\1">',
        1,
    ),
    (re.compile(r'"text/html"'), '"application/xml"', 0),
)
_BR_HR_RE: Final[re.Pattern[str]] = re.compile(r"<(br|hr)\b([^>]*?)\s*/?>", re.IGNORECASE)
_LINK_META_IMG_RE: Final[re.Pattern[str]] = re.compile(
    r"<(link|meta|img)(\s[^>]*?[^>/])>", re.IGNORECASE
)


def doctype_declaration(mode: str, *, is_xml: bool, xml_version: str) -> str:
    """Return the declaration for ``mode`` (already lower-cased)."""
    if is_xml:
        if xml_version == "1.0":
            return (
                f'<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 {mode.capitalize()}//EN" '
                f'"http://www.w3.org/TR/xhtml1/DTD/xhtml1-{mode}.dtd">'
            )
        segment: str = xml_version.replace(".", "")
        return (
            f'<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML {xml_version}//EN" '
            f'"http://www.w3.org/TR/xhtml{segment}/DTD/xhtml{segment}.dtd">'
        )

    page: str = "loose" if mode == "transitional" else mode
    suffix: str = "" if mode == "strict" else f" {mode.capitalize()}"
    return (
        f'<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01{suffix}//EN" '
        f'"http://www.w3.org/TR/html4/{page}.dtd">'
    )


def synthesize_doctype(
    text: str,
    syntax: MacroSyntax,
    *,
    is_xml: bool,
    xml_version: str,
) -> tuple[str, str | None]:
    """Replace ``doctype`` tokens by their declaration.

    Returns:
        tuple[str, str | None]: The rewritten buffer and the (lower-cased) mode
        of the first token, or ``None`` when there was none.
    """
    found: list[str] = []

    def _declaration(match: re.Match[str]) -> str:
        mode: str = match.group(1).lower()
        found.append(mode)
        return doctype_declaration(mode, is_xml=is_xml, xml_version=xml_version)

    for pattern in syntax.patterns(r"doctype\s+([A-Za-z]+)"):
        text = pattern.sub(_declaration, text)
    return text, found[0] if found else None


def apply_xml_fixups(text: str) -> str:
    """Make HTML markup well-formed XHTML (namespace, content type, empty tags)."""
    for pattern, replacement, count in _XML_FIXUPS:
        text = pattern.sub(replacement, text, count=count)
    text = _BR_HR_RE.sub(lambda m: f"<{m.group(1).lower()}{m.group(2)}/>", text)
    return _LINK_META_IMG_RE.sub(lambda m: f"<{m.group(1).lower()}{m.group(2)}/>", text)


class DoctypeStep(BaseStep):
    """Synthesize the doctype; apply XHTML fix-ups to XML documents."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def run(self, doc: RenderedDocument) -> None:
        doc.text, mode = synthesize_doctype(
            doc.text,
            doc.config.settings.macro_syntax,
            is_xml=doc.is_xml,
            xml_version=doc.xml_version,
        )
        if mode is not None:
            doc.doctype_mode = mode
            logger.debug("Doctype %s synthesized for %s", mode, doc.filename)
        if doc.is_xml:
            doc.text = apply_xml_fixups(doc.text)
