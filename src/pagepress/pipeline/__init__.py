# topmark:header:start
#
#   project      : PagePress
#   file         : __init__.py
#   file_relpath : src/pagepress/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The PagePress rewrite pipeline.

A document is read into a [`RenderedDocument`][pagepress.pipeline.context.RenderedDocument]
and passed through an ordered tuple of steps (see `pagepress.pipeline.pipelines`).
Each step wraps a pure text function from its module and records anything
noteworthy as a diagnostic on the document.
"""

from __future__ import annotations
