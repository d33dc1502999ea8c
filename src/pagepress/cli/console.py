# topmark:header:start
#
#   project      : PagePress
#   file         : console.py
#   file_relpath : src/pagepress/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""User-facing console for the CLI.

Program output (tables, versions, rendered stdin documents) goes to stdout
through `ClickConsole.print`. Everything addressed to the person at the
terminal (progress, warnings, errors) goes to stderr, so that
``pagepress render - > page.html`` captures nothing but the page. Internal
tracing uses `logging` instead, see `pagepress.config.logging`.
"""

from __future__ import annotations

import sys
from typing import Any, Protocol, TextIO

import click


class ConsoleLike(Protocol):
    """What commands need from a console."""

    enable_color: bool

    def print(self, text: str = "", *, nl: bool = True) -> None: ...

    def info(self, text: str, *, nl: bool = True) -> None: ...

    def warn(self, text: str, *, nl: bool = True) -> None: ...

    def error(self, text: str, *, nl: bool = True) -> None: ...

    def styled(self, text: str, **style_kwargs: Any) -> str: ...


class ClickConsole:
    """Console writing through `click.echo`.

    Args:
        enable_color (bool): Emit ANSI styles; when False they are stripped.
        out (TextIO | None): Program output stream (``sys.stdout`` by default).
        err (TextIO | None): Message stream (``sys.stderr`` by default).
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color: bool = enable_color
        self.out: TextIO = out or sys.stdout
        self.err: TextIO = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write program output to stdout."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def info(self, text: str, *, nl: bool = True) -> None:
        """Write a progress message to stderr."""
        click.echo(text, nl=nl, file=self.err, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning to stderr (yellow)."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="yellow")

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error to stderr (bright red)."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` passed through `click.style`, or unchanged without color.

        Args:
            text (str): Text to style.
            **style_kwargs (Any): `click.style` keywords (``fg``, ``bold``, ...).

        Returns:
            str: The styled text.
        """
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
