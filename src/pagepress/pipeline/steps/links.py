# topmark:header:start
#
#   project      : PagePress
#   file         : links.py
#   file_relpath : src/pagepress/pipeline/steps/links.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Link scan, followed by link verification when ``--href-check`` is given."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pagepress.config.logging import get_logger
from pagepress.links import scan_links
from pagepress.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)


class LinkStep(BaseStep):
    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def run(self, doc: RenderedDocument) -> None:
        doc.links = scan_links(doc.text)
        logger.debug("%s: %d link(s)", doc.filename, len(doc.links))

        checker = doc.services.link_checker
        if not doc.config.href_check or checker is None:
            return
        base_dir: Path = doc.output_path.parent if doc.output_path is not None else Path.cwd()
        checker.check(doc.links, base_dir=base_dir, diagnostics=doc.diagnostics)
