# topmark:header:start
#
#   project      : PagePress
#   file         : whitespace.py
#   file_relpath : src/pagepress/pipeline/steps/whitespace.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Whitespace compression (``compress`` >= 1).

Whitespace inside ``<pre>`` blocks is masked with the ``PRE`` token family
first. Those tokens stay in the buffer through banner insertion, script recovery
and wrapping, and are only restored by the cleanup step.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from pagepress.config.logging import get_logger
from pagepress.pipeline.steps.base import BaseStep
from pagepress.text.masking import TokenFamily

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument
    from pagepress.text.masking import MaskingCodec

logger: PagepressLogger = get_logger(__name__)

BLOCK_TAGS: Final[tuple[str, ...]] = (
    "blockquote",
    "br",
    "center",
    "div",
    "font",
    "li",
    "p",
    "table",
    "td",
    "th",
    "tr",
    "ul",
    "wbr",
)
OPTIONAL_CLOSERS: Final[tuple[str, ...]] = ("li", "p", "dd", "dt")

PRE_BLOCK_RE: Final[re.Pattern[str]] = re.compile(
    r"(<pre\b[^>]*>)(.*?)(</pre>)", re.IGNORECASE | re.DOTALL
)
# ASCII whitespace only; a literal no-break space is content.
WS_CHARS: Final[str] = " \t\n\r\f\v"
_WS: Final[str] = r"[ \t\n\r\f\v]"

_PRE_SPACE_RE: Final[re.Pattern[str]] = re.compile(_WS + "+")

_MULTI_SPACE_RE: Final[re.Pattern[str]] = re.compile(_WS + _WS + "+")
_BETWEEN_TAGS_RE: Final[re.Pattern[str]] = re.compile(">" + _WS + "+<")
_BEFORE_CLOSER_RE: Final[re.Pattern[str]] = re.compile(_WS + "+</")

_CSS_BEFORE_PUNCT_RE: Final[re.Pattern[str]] = re.compile(_WS + r"+([{}:;,])")
_CSS_AFTER_PUNCT_RE: Final[re.Pattern[str]] = re.compile(r"([{}:;,])" + _WS + "+")

_BLOCK_TAG_RE: Final[re.Pattern[str]] = re.compile(
    rf"{_WS}*(</?(?:{'|'.join(BLOCK_TAGS)}))({_WS}+[^>]+>|>){_WS}*", re.IGNORECASE
)
_OPTIONAL_CLOSER_RE: Final[re.Pattern[str]] = re.compile(
    r"</(?:" + "|".join(OPTIONAL_CLOSERS) + r")>", re.IGNORECASE
)


def mask_preformatted(text: str, masks: MaskingCodec) -> tuple[str, int]:
    """Mask every whitespace run inside ``<pre>`` blocks.

    Returns:
        tuple[str, int]: The masked buffer and the number of ``<pre>`` blocks seen.
    """
    blocks = 0

    def _mask_body(match: re.Match[str]) -> str:
        nonlocal blocks
        blocks += 1
        body: str = masks.mask(match.group(2), _PRE_SPACE_RE, TokenFamily.PRE)
        return match.group(1) + body + match.group(3)

    return PRE_BLOCK_RE.sub(_mask_body, text), blocks


def collapse_markup_whitespace(text: str) -> str:
    """Collapse runs, trim the buffer, and drop whitespace between tags."""
    text = _MULTI_SPACE_RE.sub(" ", text).strip(WS_CHARS)
    text = _BETWEEN_TAGS_RE.sub("><", text)
    return _BEFORE_CLOSER_RE.sub("</", text)


def compress_css(text: str) -> str:
    """Drop whitespace around CSS punctuation and the last ``;`` of a rule."""
    text = _CSS_BEFORE_PUNCT_RE.sub(r"\1", text)
    text = _CSS_AFTER_PUNCT_RE.sub(r"\1", text)
    return text.replace(";}", "}")


def compress_html(text: str, *, drop_optional_closers: bool) -> str:
    """Drop whitespace around block tags, and optionally the optional closers."""
    text = _BLOCK_TAG_RE.sub(r"\1\2", text)
    if drop_optional_closers:
        text = _OPTIONAL_CLOSER_RE.sub("", text)
    return text


def compress_whitespace(
    text: str,
    *,
    is_css: bool,
    drop_optional_closers: bool,
) -> str:
    """Compress an already ``<pre>``-masked buffer.

    Args:
        text (str): Buffer whose preformatted whitespace is masked.
        is_css (bool): Apply the style-sheet rules instead of the markup rules.
        drop_optional_closers (bool): Remove ``</li>``, ``</p>``, ``</dd>`` and
            ``</dt>`` (markup only).

    Returns:
        str: The compressed buffer.
    """
    text = collapse_markup_whitespace(text)
    if is_css:
        return compress_css(text)
    return compress_html(text, drop_optional_closers=drop_optional_closers)


class WhitespaceStep(BaseStep):
    """Remove incidental whitespace."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, doc: RenderedDocument) -> bool:
        return doc.profile.compress > 0

    def run(self, doc: RenderedDocument) -> None:
        text, pre_blocks = mask_preformatted(doc.text, doc.masks)
        if pre_blocks:
            logger.debug("%s: %d <pre> block(s) protected", doc.filename, pre_blocks)
            doc.wrap_enabled = False
        doc.text = compress_whitespace(
            text,
            is_css=doc.is_css,
            drop_optional_closers=not doc.is_xml and doc.doctype_mode != "strict",
        )
