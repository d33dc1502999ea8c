# topmark:header:start
#
#   project      : PagePress
#   file         : __init__.py
#   file_relpath : src/pagepress/pipeline/steps/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pipeline steps, one module per rewrite stage.

Each module exposes the stage as a pure text function (independently testable)
and a `BaseStep` subclass that applies it to a `RenderedDocument`.
"""

from __future__ import annotations
