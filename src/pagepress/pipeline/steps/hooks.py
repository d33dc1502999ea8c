# topmark:header:start
#
#   project      : PagePress
#   file         : hooks.py
#   file_relpath : src/pagepress/pipeline/steps/hooks.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pipeline step that calls one of the site processing hooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pagepress.config.logging import get_logger
from pagepress.pipeline.hooks import HookStage
from pagepress.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)


@dataclass
class HookStep(BaseStep):
    """Invoke ``doc.services.hooks`` at the given stage."""

    stage: HookStage = field(default=HookStage.MAIN)

    def run(self, doc: RenderedDocument) -> None:
        logger.debug("Calling site hook %s for %s", self.stage.value, doc.filename)
        getattr(doc.services.hooks, self.stage.value)(doc)
