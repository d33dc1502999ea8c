# topmark:header:start
#
#   project      : PagePress
#   file         : macros.py
#   file_relpath : src/pagepress/text/macros.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Macro token syntax.

A macro token is a keyword enclosed in one of the configured delimiter pairs,
by default ``<<keyword>>`` or ``<:keyword:>``. Keywords match case-insensitively.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_DELIMITERS: Final[tuple[tuple[str, str], ...]] = (("<<", ">>"), ("<:", ":>"))


@dataclass(frozen=True, slots=True)
class MacroSyntax:
    """Delimiter pairs recognized around macro keywords."""

    delimiters: tuple[tuple[str, str], ...] = DEFAULT_DELIMITERS

    def patterns(self, body: str) -> list[re.Pattern[str]]:
        """Compile ``body`` wrapped in each delimiter pair (case-insensitive)."""
        return [
            re.compile(re.escape(opening) + body + re.escape(closing), re.IGNORECASE)
            for opening, closing in self.delimiters
        ]

    def substitute(
        self,
        text: str,
        keyword: str,
        replacement: str | Callable[[re.Match[str]], str],
    ) -> tuple[str, int]:
        """Replace every token for ``keyword``.

        Args:
            text (str): Buffer to rewrite.
            keyword (str): Macro keyword (literal, matched case-insensitively).
            replacement (str | Callable[[re.Match[str]], str]): Literal text or
                a match callback.

        Returns:
            tuple[str, int]: The rewritten buffer and the number of replacements.
        """
        if isinstance(replacement, str):
            literal: str = replacement

            def repl(_match: re.Match[str]) -> str:
                return literal

        else:
            repl = replacement

        total = 0
        for pattern in self.patterns(re.escape(keyword)):
            text, count = pattern.subn(repl, text)
            total += count
        return text, total

    def find_unresolved(self, text: str) -> list[str]:
        """Return every token still present in ``text``, in order of appearance."""
        found: list[tuple[int, str]] = []
        for opening, closing in self.delimiters:
            body = r"[^\s<>" + re.escape(closing[0]) + r"][^<>\n]*?"
            pattern = re.compile(re.escape(opening) + body + re.escape(closing))
            found.extend((m.start(), m.group(0)) for m in pattern.finditer(text))
        return [token for _, token in sorted(found)]
