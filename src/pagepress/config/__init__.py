# topmark:header:start
#
#   project      : PagePress
#   file         : __init__.py
#   file_relpath : src/pagepress/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for PagePress.

Sub-modules:
    * `keys`: TOML section and key names.
    * `io`: tomlkit-based loaders and checked getters.
    * `profiles`: per-type profiles and ``copy_from`` inheritance resolution.
    * `model`: `MutableConfig` builder and immutable runtime `Config`.
    * `logging`: the PagePress logger, TRACE level and colored formatter.

This package deliberately re-exports nothing: `pagepress.config.logging` is
imported by the core layer, which the model itself depends on.
"""

from __future__ import annotations
