# topmark:header:start
#
#   project      : PagePress
#   file         : __init__.py
#   file_relpath : src/pagepress/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PagePress package.

PagePress compresses and formats HTML, XHTML, CSS and PHP sources. It expands a
small macro language, strips comments without touching embedded scripts,
encodes non-ASCII text as character references, collapses incidental
whitespace, optionally re-wraps lines and injects a canonical ``DOCTYPE``
declaration and a banner, while leaving the rendered page unchanged.
"""

from __future__ import annotations
