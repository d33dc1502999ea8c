# topmark:header:start
#
#   project      : PagePress
#   file         : synonyms.py
#   file_relpath : src/pagepress/pipeline/steps/synonyms.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shorter tag synonyms (aggressive compression only)."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from pagepress.config.logging import get_logger
from pagepress.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)

TAG_SYNONYMS: Final[tuple[tuple[str, str], ...]] = (
    ("strong", "b"),
    ("em", "i"),
)


def shorten_tags(text: str) -> str:
    """Rewrite ``<strong>`` as ``<b>`` and ``<em>`` as ``<i>``, keeping attributes."""
    for long_name, short_name in TAG_SYNONYMS:
        pattern = re.compile(r"<(/?)" + long_name + r"((?:\s[^>]*)?)>", re.IGNORECASE)
        text = pattern.sub(r"<\g<1>" + short_name + r"\g<2>>", text)
    return text


class SynonymStep(BaseStep):
    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, doc: RenderedDocument) -> bool:
        return doc.profile.compress > 1

    def run(self, doc: RenderedDocument) -> None:
        doc.text = shorten_tags(doc.text)
