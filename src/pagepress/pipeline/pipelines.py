# topmark:header:start
#
#   project      : PagePress
#   file         : pipelines.py
#   file_relpath : src/pagepress/pipeline/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Named pipeline variants for PagePress (immutable, typed step sequences).

Overview
--------
- ``TEXT``: the core rewrite, prolog → ... → cleanup.
- ``RENDER``: ``TEXT`` wrapped by the site hooks, plus the link scan.

Mermaid (orientation)
---------------------
```mermaid
flowchart TD
  PRE[pre hook] --> PR[prolog] --> MAIN[main hook] --> M[macros]
  M --> D[doctype] --> E[encoder] --> C[comments] --> S[synonyms]
  S --> W[whitespace] --> B[banner] --> J[scripts] --> X[wrap]
  X --> CL[cleanup] --> L[links] --> POST[post hook]
```

Notes:
* The order is significant: masks set by one step are consumed by a later one
  (script delimiters by ``ScriptStep``, ``<pre>`` whitespace by ``CleanupStep``).
* Steps are instantiated objects; the runner calls them in order.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from pagepress.pipeline.contracts import Step
from pagepress.pipeline.hooks import HookStage

from .steps import (
    banner,
    cleanup,
    comments,
    doctype,
    encoder,
    hooks,
    links,
    macros,
    prolog,
    scripts,
    synonyms,
    whitespace,
    wrapper,
)


def _text_steps(*, with_main_hook: bool) -> tuple[Step, ...]:
    head: tuple[Step, ...] = (prolog.PrologStep(),)
    if with_main_hook:
        head += (hooks.HookStep(name="MainHookStep", stage=HookStage.MAIN),)
    return head + (
        macros.MacroStep(),  # longdate, date, file, urlfile, nowrap
        doctype.DoctypeStep(),  # <<doctype MODE>> and XHTML fix-ups
        encoder.EncoderStep(),  # non_ascii profiles only
        comments.CommentStep(),  # masks script delimiters and SSI directives
        synonyms.SynonymStep(),  # compress 2
        whitespace.WhitespaceStep(),  # compress >= 1; masks <pre> whitespace
        banner.BannerStep(),
        scripts.ScriptStep(),  # unmasks script delimiters
        wrapper.WrapStep(),
        cleanup.CleanupStep(),  # unmasks <pre> whitespace
    )


# Text rewriting only (no site hooks, no link scan):
TEXT_PIPELINE: Final[tuple[Step, ...]] = _text_steps(with_main_hook=False)

# Full per-document pipeline:
RENDER_PIPELINE: Final[tuple[Step, ...]] = (
    (hooks.HookStep(name="PreHookStep", stage=HookStage.PRE),)
    + _text_steps(with_main_hook=True)
    + (
        links.LinkStep(),  # href scan, optional verification
        hooks.HookStep(name="PostHookStep", stage=HookStage.POST),
    )
)


class Pipeline(tuple[Step, ...], Enum):
    """Available pipelines, mapped to their step sequences."""

    TEXT = TEXT_PIPELINE
    RENDER = RENDER_PIPELINE

    @property
    def steps(self) -> tuple[Step, ...]:
        """Return the instantiated, ordered step sequence for this pipeline."""
        return self.value
