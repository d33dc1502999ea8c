# topmark:header:start
#
#   project      : PagePress
#   file         : prolog.py
#   file_relpath : src/pagepress/pipeline/steps/prolog.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Prolog detection and input normalization.

* A leading ``<?xml ...?>`` declaration (any case) marks the document as XML
  and supplies its version (default ``1.0``).
* ``\\r\\n``, ``\\r`` and ``\\f`` line breaks become ``\\n``; non-UNIX line
  endings are reported.
* Everything from a line consisting of ``__END__`` onwards is dropped.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from pagepress.config.logging import get_logger
from pagepress.constants import END_MARKER
from pagepress.core.diagnostics import DiagnosticKind
from pagepress.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)

PROLOG_RE: Final[re.Pattern[str]] = re.compile(r"^<\??XML([^?>]*)\??>", re.IGNORECASE)
VERSION_RE: Final[re.Pattern[str]] = re.compile(r'version="(\d+\.\d+)"', re.IGNORECASE)
_LINE_BREAK_RE: Final[re.Pattern[str]] = re.compile(r"\r\n|[\r\f]")


def detect_prolog(text: str) -> str | None:
    """Return the declared XML version if ``text`` starts with an XML prolog.

    Returns:
        str | None: The version (``"1.0"`` when the prolog declares none), or
        ``None`` when there is no prolog.
    """
    match: re.Match[str] | None = PROLOG_RE.match(text)
    if match is None:
        return None
    version: re.Match[str] | None = VERSION_RE.search(match.group(1))
    return version.group(1) if version else "1.0"


def normalize_line_breaks(text: str) -> tuple[str, bool]:
    """Return ``text`` with UNIX line breaks, and whether a carriage return was seen."""
    return _LINE_BREAK_RE.sub("\n", text), "\r" in text


def truncate_at_end_marker(text: str) -> str:
    """Drop everything from the first ``\\n__END__\\n`` marker on."""
    index: int = text.find(END_MARKER)
    return text if index < 0 else text[:index]


class PrologStep(BaseStep):
    """Detect XML, normalize line breaks and honor the end marker."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def run(self, doc: RenderedDocument) -> None:
        version: str | None = detect_prolog(doc.text)
        if version is not None:
            doc.is_xml = True
            doc.xml_version = version
            logger.debug("XML prolog found in %s (version %s)", doc.filename, version)

        text, had_cr = normalize_line_breaks(doc.text)
        if had_cr:
            doc.diagnostics.add_warning(
                f"{doc.filename}: file uses non-UNIX line endings", DiagnosticKind.ENCODING
            )
        doc.text = truncate_at_end_marker(text)
