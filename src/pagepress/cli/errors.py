# topmark:header:start
#
#   project      : PagePress
#   file         : errors.py
#   file_relpath : src/pagepress/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the PagePress CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Library errors are converted with
    `from_pagepress_error()`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's default
    styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from pagepress.core.errors import PagepressError
from pagepress.core.exit_codes import ExitCode


class PagepressCliError(click.ClickException):
    """Base class for all PagePress CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class PagepressUsageError(PagepressCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class PagepressConfigError(PagepressCliError):
    """Error for configuration errors (missing/invalid config or site module)."""

    exit_code = ExitCode.CONFIG_ERROR


class PagepressIOError(PagepressCliError):
    """Error for I/O errors reading or writing files."""

    exit_code = ExitCode.IO_ERROR


def from_pagepress_error(exc: PagepressError) -> PagepressCliError:
    """Wrap a library error, keeping its exit code."""
    error = PagepressCliError(str(exc))
    error.exit_code = exc.exit_code
    return error
