# topmark:header:start
#
#   project      : PagePress
#   file         : runner.py
#   file_relpath : src/pagepress/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run a pipeline over a single document."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pagepress.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pagepress.config.logging import PagepressLogger

    from .context import RenderedDocument
    from .contracts import Step

logger: PagepressLogger = get_logger(__name__)


def run(doc: RenderedDocument, steps: Sequence[Step]) -> RenderedDocument:
    """Execute the pipeline sequentially.

    Args:
        doc (RenderedDocument): Mutable document.
        steps (Sequence[Step]): Ordered sequence of pipeline steps.

    Returns:
        RenderedDocument: The document after all steps have run.
    """
    logger.info(
        "%s: type %s (compress %d, non_ascii %s, textwidth %d)",
        doc.source,
        doc.type_id,
        doc.profile.compress,
        "on" if doc.profile.non_ascii else "off",
        doc.profile.textwidth,
    )
    for step in steps:
        doc = step(doc)
    return doc
