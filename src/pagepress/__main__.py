# topmark:header:start
#
#   project      : PagePress
#   file         : __main__.py
#   file_relpath : src/pagepress/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running PagePress via ``python -m pagepress``.

Delegates directly to :func:`pagepress.cli.main.cli`, so there is a single
authoritative CLI entry point regardless of how PagePress is launched.

Examples:
    Render a page into the ``site/`` directory::

        python -m pagepress render --out site index.html
"""

from __future__ import annotations

from pagepress.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
