# topmark:header:start
#
#   project      : PagePress
#   file         : base.py
#   file_relpath : src/pagepress/pipeline/steps/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base class for class-based pipeline steps.

The runner invokes steps as *callables*. `BaseStep` implements the common
lifecycle:

    doc = step(doc)  # internally: may_proceed -> run?
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pagepress.config.logging import get_logger

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)


@dataclass
class BaseStep:
    """Reusable foundation for pipeline steps.

    Subclass this to implement a concrete step by overriding ``may_proceed()``
    and ``run()``. Do not override ``__call__``.

    Attributes:
        name (str): Stable step identifier for logs and ``doc.steps``.
    """

    name: str

    def __call__(self, doc: RenderedDocument) -> RenderedDocument:
        """Invoke the step lifecycle: gate, then run (if allowed).

        Args:
            doc (RenderedDocument): The mutable document.

        Returns:
            RenderedDocument: The same document instance after mutation.
        """
        if self.may_proceed(doc):
            logger.debug("Step %s: running on %s", self.name, doc.filename)
            doc.steps.append(self.name)
            self.run(doc)
        else:
            logger.trace("Step %s: skipped for %s", self.name, doc.filename)
        return doc

    def may_proceed(self, doc: RenderedDocument) -> bool:
        """Return whether the step should run (default: always)."""
        return True

    def run(self, doc: RenderedDocument) -> None:
        """Perform the step's work, mutating ``doc`` in place."""
        pass
