# topmark:header:start
#
#   project      : PagePress
#   file         : banner.py
#   file_relpath : src/pagepress/pipeline/steps/banner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Banner comment insertion."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from pagepress.config.logging import get_logger
from pagepress.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)

HTML_OPEN_RE: Final[re.Pattern[str]] = re.compile(r"(<html[^>]*>)", re.IGNORECASE)


def insert_banner(text: str, banner: str, *, is_css: bool) -> str:
    """Insert ``banner`` as a comment.

    Style sheets get a ``/* */`` comment on top of the file. Other documents get
    an HTML comment right after the first ``<html>`` tag, and nothing when they
    have none.
    """
    if is_css:
        return f"/* {banner} */\n\n{text}"
    return HTML_OPEN_RE.sub(lambda m: f"{m.group(1)}\n\n<!-- {banner} -->\n\n", text, count=1)


class BannerStep(BaseStep):
    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, doc: RenderedDocument) -> bool:
        return doc.config.settings.add_banner

    def run(self, doc: RenderedDocument) -> None:
        doc.text = insert_banner(doc.text, doc.config.banner_text, is_css=doc.is_css)
