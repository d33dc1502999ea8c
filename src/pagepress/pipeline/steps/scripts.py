# topmark:header:start
#
#   project      : PagePress
#   file         : scripts.py
#   file_relpath : src/pagepress/pipeline/steps/scripts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Script formatting recovery.

Compression joins embedded scripts into a single line. This step puts a line
break after every ``);`` and restores the ``<!--`` / ``-->`` wrappers masked
during comment removal, each on a line of its own.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from pagepress.config.logging import get_logger
from pagepress.pipeline.steps.base import BaseStep
from pagepress.pipeline.steps.comments import SCRIPT_END_RE
from pagepress.text.masking import TokenFamily

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument
    from pagepress.text.masking import MaskingCodec

logger: PagepressLogger = get_logger(__name__)

_CALL_END_RE: Final[re.Pattern[str]] = re.compile(r"(\);)\s*")
_SCRIPT_OPEN_RE: Final[re.Pattern[str]] = re.compile(
    r"(<script\b[^>]*>)\s*<!--", re.IGNORECASE
)
_SCRIPT_CLOSE_RE: Final[re.Pattern[str]] = re.compile(r"-->\s*(</script>)", re.IGNORECASE)


def recover_scripts(text: str, masks: MaskingCodec) -> str:
    """Re-expand compressed script blocks and restore their comment wrappers."""
    text = _CALL_END_RE.sub("\\1\n", text)
    text = masks.unmask(text, TokenFamily.SCRIPT, decorate=lambda original: original + "\n")
    text = _SCRIPT_OPEN_RE.sub("\\1\n<!--", text)
    return _SCRIPT_CLOSE_RE.sub("-->\n\\1", text)


class ScriptStep(BaseStep):
    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, doc: RenderedDocument) -> bool:
        return SCRIPT_END_RE.search(doc.text) is not None

    def run(self, doc: RenderedDocument) -> None:
        doc.text = recover_scripts(doc.text, doc.masks)
