# topmark:header:start
#
#   project      : PagePress
#   file         : macros.py
#   file_relpath : src/pagepress/pipeline/steps/macros.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Macro expansion.

Recognized keywords (case-insensitive, in either delimiter style):

========== ==============================================================
longdate   locale-formatted timestamp of the run
date       timestamp formatted with ``settings.date_format``
file       output file name
urlfile    output file name without a trailing language suffix
           (``index.html.sv`` -> ``index.html``)
nowrap     removed; disables line wrapping for this document
========== ==============================================================

``doctype`` tokens are left for the doctype step.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from pagepress.config.logging import get_logger
from pagepress.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument
    from pagepress.text.macros import MacroSyntax

logger: PagepressLogger = get_logger(__name__)

_LANGUAGE_SUFFIX_RE: Final[re.Pattern[str]] = re.compile(r"(\.\S+)\.\w\w$")


@dataclass(frozen=True)
class MacroValues:
    """Values substituted for the macro keywords."""

    long_date: str
    short_date: str
    filename: str


def url_filename(filename: str) -> str:
    """Return ``filename`` without a trailing two-letter language suffix."""
    return _LANGUAGE_SUFFIX_RE.sub(r"\1", filename, count=1)


def expand_macros(text: str, syntax: MacroSyntax, values: MacroValues) -> tuple[str, bool]:
    """Expand the macro keywords in ``text``.

    Args:
        text (str): Buffer to rewrite.
        syntax (MacroSyntax): Recognized delimiter pairs.
        values (MacroValues): Replacement values.

    Returns:
        tuple[str, bool]: The rewritten buffer, and whether a ``nowrap``
        token was found.
    """
    replacements: tuple[tuple[str, str], ...] = (
        ("longdate", values.long_date),
        ("date", values.short_date),
        ("file", values.filename),
        ("urlfile", url_filename(values.filename)),
    )
    for keyword, value in replacements:
        text, count = syntax.substitute(text, keyword, value)
        if count:
            logger.trace("Expanded %d '%s' macro(s)", count, keyword)

    text, nowrap = syntax.substitute(text, "nowrap", "")
    return text, nowrap > 0


class MacroStep(BaseStep):
    """Expand macros; a ``nowrap`` macro disables wrapping."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def run(self, doc: RenderedDocument) -> None:
        values = MacroValues(
            long_date=doc.config.long_date,
            short_date=doc.config.short_date,
            filename=doc.filename,
        )
        doc.text, nowrap = expand_macros(doc.text, doc.config.settings.macro_syntax, values)
        if nowrap:
            doc.wrap_enabled = False
