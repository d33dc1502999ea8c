# topmark:header:start
#
#   project      : PagePress
#   file         : __init__.py
#   file_relpath : src/pagepress/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command-line interface for PagePress (Click)."""
