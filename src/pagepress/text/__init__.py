# topmark:header:start
#
#   project      : PagePress
#   file         : __init__.py
#   file_relpath : src/pagepress/text/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure text primitives shared by the rendering steps.

Modules:
    * `entities`: named/numeric character-entity encoding.
    * `macros`: configurable macro-token delimiters.
    * `masking`: reversible placeholder tokens that shield regions from rewrites.
    * `wrapping`: whitespace-safe line wrapping.
"""

from __future__ import annotations
