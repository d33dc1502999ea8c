# topmark:header:start
#
#   project      : PagePress
#   file         : masking.py
#   file_relpath : src/pagepress/text/masking.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reversible masking of text regions.

A destructive rewrite (comment stripping, whitespace compression) must not touch
some regions of the buffer. Those regions are replaced by inert placeholder
tokens beforehand and restored afterwards.

Tokens are built from Unicode private-use characters, contain no whitespace
and no markup characters, and carry a per-family letter so that masks of
different families never collide::

    \\ue000 <family letter> <index> \\ue001

`MaskingCodec` keeps the masked originals per family; ``unmask`` restores
exactly the tokens it issued for that family.

A raw buffer may already hold the sentinel characters. ``escape`` turns each of
them into a ``LITERAL`` token before anything else is masked, and
``unescape`` puts them back last; otherwise such input could be mistaken for a
token on ``unmask``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Final

from pagepress.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from pagepress.config.logging import PagepressLogger

logger: PagepressLogger = get_logger(__name__)

TOKEN_OPEN: Final[str] = "\ue000"
TOKEN_CLOSE: Final[str] = "\ue001"
# Soft line-break marker used while wrapping markup.
SOFT_BREAK: Final[str] = "\ue002"

_SENTINEL_RE: Final[re.Pattern[str]] = re.compile("[\ue000\ue001\ue002]")


class TokenFamily(Enum):
    """Independent token alphabets.

    Members:
        SCRIPT: ``<!--`` / ``-->`` delimiters inside ``<script>`` bodies.
        SSI: server-side-include directive comments.
        PRE: whitespace characters inside ``<pre>`` blocks.
        LITERAL: sentinel characters found in the input itself.
    """

    SCRIPT = "S"
    SSI = "I"
    PRE = "P"
    LITERAL = "L"

    @property
    def token_re(self) -> re.Pattern[str]:
        """Pattern matching every token of this family (group 1: index)."""
        return re.compile(re.escape(TOKEN_OPEN + self.value) + r"(\d+)" + re.escape(TOKEN_CLOSE))


@dataclass
class MaskingCodec:
    """Per-document store of masked text, one list per token family."""

    _stash: dict[TokenFamily, list[str]] = field(default_factory=lambda: {})

    def _token(self, family: TokenFamily, original: str) -> str:
        stash: list[str] = self._stash.setdefault(family, [])
        stash.append(original)
        return f"{TOKEN_OPEN}{family.value}{len(stash) - 1}{TOKEN_CLOSE}"

    def mask(self, text: str, pattern: re.Pattern[str] | str, family: TokenFamily) -> str:
        """Replace every match of ``pattern`` by a token of ``family``.

        Args:
            text (str): Buffer to rewrite.
            pattern (re.Pattern[str] | str): Region to shield (the whole match
                is masked).
            family (TokenFamily): Token alphabet to draw from.

        Returns:
            str: The masked buffer.
        """
        regex: re.Pattern[str] = re.compile(pattern) if isinstance(pattern, str) else pattern
        return regex.sub(lambda m: self._token(family, m.group(0)), text)

    def unmask(
        self,
        text: str,
        family: TokenFamily,
        decorate: Callable[[str], str] | None = None,
    ) -> str:
        """Restore every token of ``family`` issued by this codec.

        Args:
            text (str): Buffer containing tokens.
            family (TokenFamily): Token alphabet to restore.
            decorate (Callable[[str], str] | None): Optional transform applied to
                each restored original.

        Returns:
            str: The buffer with this family's tokens replaced by their originals.
        """
        stash: list[str] = self._stash.get(family, [])

        def _restore(match: re.Match[str]) -> str:
            index = int(match.group(1))
            if index >= len(stash):
                return match.group(0)
            original: str = stash[index]
            return decorate(original) if decorate is not None else original

        restored: str = family.token_re.sub(_restore, text)
        logger.trace("Unmasked %d %s token(s)", len(stash), family.name)
        return restored

    def count(self, family: TokenFamily) -> int:
        """Return how many regions of ``family`` were masked so far."""
        return len(self._stash.get(family, []))

    def escape(self, text: str) -> str:
        """Shield sentinel characters already present in a raw buffer."""
        return self.mask(text, _SENTINEL_RE, TokenFamily.LITERAL)

    def unescape(self, text: str) -> str:
        """Inverse of `escape`; run after every other family is restored."""
        return self.unmask(text, TokenFamily.LITERAL)
