# topmark:header:start
#
#   project      : PagePress
#   file         : __init__.py
#   file_relpath : src/pagepress/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core primitives shared by the config, pipeline and CLI layers.

Sections:
    diagnostics: severity levels, diagnostic kinds and the per-document log.
    errors: fatal exception hierarchy (configuration and I/O).
    exit_codes: process exit codes used by the CLI.
"""

from __future__ import annotations
