# topmark:header:start
#
#   project      : PagePress
#   file         : contracts.py
#   file_relpath : src/pagepress/pipeline/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contracts for pipeline steps (engine-facing).

Steps are instantiated objects that are *callable*; the runner invokes them as
``doc = step(doc)``.

Lifecycle
---------
1) ``step.may_proceed(doc)`` gates execution (profile settings, document state).
2) If allowed, ``step.run(doc)`` rewrites ``doc.text`` and updates derived state.

Steps never raise for malformed input; they record diagnostics instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .context import RenderedDocument


class Step(Protocol):
    """Protocol for a single pipeline step.

    Implementations typically subclass [`pagepress.pipeline.steps.base.BaseStep`][].
    """

    name: str

    def may_proceed(self, doc: RenderedDocument) -> bool:
        """Return whether the step should run for this document."""
        ...

    def run(self, doc: RenderedDocument) -> None:
        """Execute the step, mutating the document in place."""
        ...

    def __call__(self, doc: RenderedDocument) -> RenderedDocument:
        """Run the step lifecycle: gate, then run.

        Args:
            doc (RenderedDocument): The mutable document.

        Returns:
            RenderedDocument: The same document object, for chaining.
        """
        ...
