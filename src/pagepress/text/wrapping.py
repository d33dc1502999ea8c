# topmark:header:start
#
#   project      : PagePress
#   file         : wrapping.py
#   file_relpath : src/pagepress/text/wrapping.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Greedy, whitespace-only line wrapping.

Only ASCII whitespace separates words. Other Unicode spaces (e.g. a literal
no-break space) are part of the word they sit in and are never broken on.
"""

from __future__ import annotations

import re
import textwrap
from typing import Final

_WHITESPACE_RUN_RE: Final[re.Pattern[str]] = re.compile(r"[ \t\n\r\f\v]+")


def collapse_whitespace(text: str) -> str:
    """Return ``text`` with whitespace runs collapsed to one space and trimmed."""
    return _WHITESPACE_RUN_RE.sub(" ", text).strip(" ")


def wrap_text(text: str, width: int) -> str:
    """Re-flow ``text`` to lines of at most ``width`` columns.

    Every whitespace run (existing newlines included) is a break opportunity.
    A word longer than ``width`` is kept whole on a line of its own.

    Args:
        text (str): Buffer to wrap.
        width (int): Target column width (must be positive).

    Returns:
        str: The wrapped buffer. Replacing its newlines with spaces yields
        `collapse_whitespace(text)`.
    """
    wrapper = textwrap.TextWrapper(
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    )
    return "\n".join(wrapper.wrap(collapse_whitespace(text)))
