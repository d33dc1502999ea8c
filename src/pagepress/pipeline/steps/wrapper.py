# topmark:header:start
#
#   project      : PagePress
#   file         : wrapper.py
#   file_relpath : src/pagepress/pipeline/steps/wrapper.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line wrapping to the profile's ``textwidth``."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from pagepress.config.logging import get_logger
from pagepress.pipeline.steps.base import BaseStep
from pagepress.text.masking import SOFT_BREAK
from pagepress.text.wrapping import wrap_text

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)

PRE_OPEN_RE: Final[re.Pattern[str]] = re.compile(r"<pre\b", re.IGNORECASE)

_BREAK_AFTER_OPENER_RE: Final[re.Pattern[str]] = re.compile(r"(</?)\n")


def wrap_markup(text: str, width: int) -> str:
    """Wrap ``text`` at ``width`` columns, preferring breaks between tags.

    A marked space is inserted between adjacent tags so the wrapper may break
    there; the marked spaces left unused are removed again afterwards, while
    whitespace already present between tags is kept. Breaks that landed right
    after ``<`` / ``</`` or right before ``>`` are moved outside the tag.
    """
    text = text.replace("><", ">" + SOFT_BREAK + " <")
    text = wrap_text(text, width)
    text = text.replace(SOFT_BREAK + " ", "").replace(SOFT_BREAK, "")
    text = _BREAK_AFTER_OPENER_RE.sub("\n\\1", text)
    return text.replace("\n>", ">\n")


class WrapStep(BaseStep):
    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, doc: RenderedDocument) -> bool:
        return (
            doc.wrap_enabled
            and doc.profile.textwidth > 0
            and PRE_OPEN_RE.search(doc.text) is None
        )

    def run(self, doc: RenderedDocument) -> None:
        logger.debug("%s: wrapping at %d columns", doc.filename, doc.profile.textwidth)
        doc.text = wrap_markup(doc.text, doc.profile.textwidth)
