# topmark:header:start
#
#   project      : PagePress
#   file         : conftest.py
#   file_relpath : tests/pipeline/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared helpers for pipeline step tests.

Steps are exercised on a `RenderedDocument` built with `make_doc`, either one
at a time or through `render`, which runs the text pipeline end to end.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pagepress.pipeline import runner
from pagepress.pipeline.context import RenderedDocument, RenderServices
from pagepress.pipeline.engine import render_text
from tests.conftest import make_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from pagepress.config.model import Config
    from pagepress.pipeline.contracts import Step


def make_doc(
    text: str,
    *,
    type_id: str = "html",
    config: Config | None = None,
    services: RenderServices | None = None,
    output_path: Path | None = None,
    source: str | None = None,
) -> RenderedDocument:
    """Bootstrap a document the way the engine does (default config, no banner)."""
    return RenderedDocument.bootstrap(
        source=source or f"page.{type_id}",
        text=text,
        type_id=type_id,
        config=config if config is not None else make_config(),
        services=services,
        output_path=output_path,
    )


def run_steps(doc: RenderedDocument, steps: Sequence[Step]) -> RenderedDocument:
    """Run ``steps`` over ``doc`` in order."""
    return runner.run(doc, steps)


def render(text: str, type_id: str = "html", **overrides: Any) -> RenderedDocument:
    """Render ``text`` through the text pipeline with config ``overrides``."""
    return render_text(
        text,
        config=make_config(**overrides),
        type_id=type_id,
        filename=f"page.{type_id}",
    )
