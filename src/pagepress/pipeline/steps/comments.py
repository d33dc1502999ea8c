# topmark:header:start
#
#   project      : PagePress
#   file         : comments.py
#   file_relpath : src/pagepress/pipeline/steps/comments.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comment removal (always runs).

Removed comment styles:

* ``// ...`` line comments and ``/* ... */`` blocks, in CSS and PHP types and in
  any document containing ``<?php``.
* ``# ...`` line comments in every non-CSS type, when the ``#`` follows
  whitespace (so ``href="#top"`` survives). ``\\#`` yields a literal ``#``.
* ``<!-- ... -->`` HTML comments. A comment alone on its line takes the line
  with it.

Shielded from removal:

* the ``<!--`` / ``-->`` wrapper inside ``<script>`` bodies (masked with the
  ``SCRIPT`` family, restored by the script recovery step), and
* server-side-include directives such as ``<!--#include virtual="x" -->``
  (``SSI`` family, restored before this step returns).
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

SSI_DIRECTIVES: Final[tuple[str, ...]] = (
    "set",
    "if",
    "elif",
    "else",
    "endif",
    "config",
    "echo",
    "exec",
    "include",
)

SCRIPT_END_RE: Final[re.Pattern[str]] = re.compile(r"</script>", re.IGNORECASE)
SCRIPT_BLOCK_RE: Final[re.Pattern[str]] = re.compile(
    r"(<script\b[^>]*>)(.*?)(</script>)", re.IGNORECASE | re.DOTALL
)
# "// -->" is kept whole so the line-comment stripper cannot eat the closer.
SCRIPT_DELIMITER_RE: Final[re.Pattern[str]] = re.compile(r"//[ \t]*-->|<!--|-->")
SSI_RE: Final[re.Pattern[str]] = re.compile(
    r"<!--#(?:" + "|".join(SSI_DIRECTIVES) + r")\b[^>]*?-->"
)
PHP_OPEN_RE: Final[re.Pattern[str]] = re.compile(r"<\?php", re.IGNORECASE)

_SLASH_LINE_RE: Final[re.Pattern[str]] = re.compile(r"(?:^|\s+)//.*?\n")
_BLOCK_RE: Final[re.Pattern[str]] = re.compile(r"/\*.*?\*/", re.DOTALL)
_HASH_LINE_RE: Final[re.Pattern[str]] = re.compile(r"(?:^|\s+)#.*?\n")
_ESCAPED_HASH_RE: Final[re.Pattern[str]] = re.compile(r"\\#")
_HTML_LINE_RE: Final[re.Pattern[str]] = re.compile(r"\n[ \t]*<!--[^\n]*?-->[ \t]*(?=\n)")
_HTML_RE: Final[re.Pattern[str]] = re.compile(r"<!--.*?-->", re.DOTALL)


def _sub_until_stable(pattern: re.Pattern[str], replacement: str, text: str) -> str:
    """Apply ``pattern`` repeatedly; adjacent matches share their boundaries."""
    while True:
        text, count = pattern.subn(replacement, text)
        if count == 0:
            return text


def mask_script_delimiters(text: str, masks: MaskingCodec) -> str:
    """Mask the HTML comment delimiters inside every ``<script>`` body."""

    def _mask_body(match: re.Match[str]) -> str:
        body: str = masks.mask(match.group(2), SCRIPT_DELIMITER_RE, TokenFamily.SCRIPT)
        return match.group(1) + body + match.group(3)

    return SCRIPT_BLOCK_RE.sub(_mask_body, text)


def strip_code_comments(text: str) -> str:
    """Remove ``//`` line comments and ``/* */`` blocks."""
    text = _sub_until_stable(_SLASH_LINE_RE, "\n", text)
    return _BLOCK_RE.sub("", text)


def strip_hash_comments(text: str) -> str:
    """Remove whitespace-preceded ``#`` comments, then unescape ``\\#``."""
    text = _sub_until_stable(_HASH_LINE_RE, "\n", text)
    return _ESCAPED_HASH_RE.sub("#", text)


def strip_html_comments(text: str) -> str:
    """Remove ``<!-- -->`` comments; one alone on its line takes the line along."""
    text = _HTML_LINE_RE.sub("", text)
    return _HTML_RE.sub("", text)


def strip_comments(text: str, *, type_id: str, masks: MaskingCodec) -> tuple[str, bool]:
    """Run every comment stripper applicable to ``type_id``.

    Args:
        text (str): Buffer to rewrite.
        type_id (str): Document type; ``css`` and ``php`` select code comments.
        masks (MaskingCodec): Store for the script and SSI masks. Sentinel
            characters already in ``text`` are escaped here, ahead of the
            first mask.

    Returns:
        tuple[str, bool]: The rewritten buffer and whether it contains a
        ``</script>`` tag (script delimiters are left masked in that case).
    """
    text = masks.escape(text)
    has_script: bool = SCRIPT_END_RE.search(text) is not None
    if has_script:
        text = mask_script_delimiters(text, masks)
    text = masks.mask(text, SSI_RE, TokenFamily.SSI)

    if type_id in ("css", "php") or PHP_OPEN_RE.search(text):
        text = strip_code_comments(text)
    if type_id != "css":
        text = strip_hash_comments(text)
    text = strip_html_comments(text)

    return masks.unmask(text, TokenFamily.SSI), has_script


class CommentStep(BaseStep):
    """Strip comments; scripts disable wrapping for the document."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def run(self, doc: RenderedDocument) -> None:
        doc.text, has_script = strip_comments(doc.text, type_id=doc.type_id, masks=doc.masks)
        if has_script:
            doc.wrap_enabled = False
        if "<!--" in doc.text and "-->" not in doc.text.split("<!--", 1)[1]:
            doc.diagnostics.add_warning(f"{doc.filename}: unterminated HTML comment")
