# topmark:header:start
#
#   project      : PagePress
#   file         : cleanup.py
#   file_relpath : src/pagepress/pipeline/steps/cleanup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Final cleanup: restore masked text, report leftover macro tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pagepress.config.logging import get_logger
from pagepress.core.diagnostics import DiagnosticKind
from pagepress.pipeline.steps.base import BaseStep
from pagepress.text.masking import TokenFamily

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)


class CleanupStep(BaseStep):
    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def run(self, doc: RenderedDocument) -> None:
        doc.text = doc.masks.unescape(doc.masks.unmask(doc.text, TokenFamily.PRE))
        for token in doc.config.settings.macro_syntax.find_unresolved(doc.text):
            doc.diagnostics.add_error(
                f"{doc.filename}: token {token} was not recognised",
                DiagnosticKind.UNRESOLVED_TOKEN,
            )
