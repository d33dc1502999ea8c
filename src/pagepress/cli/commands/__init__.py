# topmark:header:start
#
#   project      : PagePress
#   file         : __init__.py
#   file_relpath : src/pagepress/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands (``render``, ``types``, ``version``)."""
