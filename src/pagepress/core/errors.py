# topmark:header:start
#
#   project      : PagePress
#   file         : errors.py
#   file_relpath : src/pagepress/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fatal error hierarchy for PagePress.

Only two categories of problems abort a run: an unusable configuration and
an input or output file that cannot be read or written. Everything else
(unknown type references, stray macros, broken links, missing helper tools)
is recorded as a [`Diagnostic`][pagepress.core.diagnostics.Diagnostic] and
processing continues.

The CLI layer maps these exceptions to exit codes; the library layer never
exits the process.
"""

from __future__ import annotations

from pathlib import Path

from pagepress.core.exit_codes import ExitCode


class PagepressError(Exception):
    """Base class for all fatal PagePress errors."""

    exit_code: ExitCode = ExitCode.FAILURE


class ConfigError(PagepressError):
    """The configuration cannot be used (e.g. the type table has no ``default`` entry)."""

    exit_code = ExitCode.CONFIG_ERROR


class InputError(PagepressError):
    """An input file could not be read.

    Args:
        path (Path | str): The offending input.
        reason (str): Human-readable cause.
        exit_code (ExitCode): Specific exit code for the failure.
    """

    def __init__(
        self,
        path: Path | str,
        reason: str,
        *,
        exit_code: ExitCode = ExitCode.IO_ERROR,
    ) -> None:
        super().__init__(f"Cannot read '{path}': {reason}")
        self.path = Path(path)
        self.reason = reason
        self.exit_code = exit_code


class OutputError(PagepressError):
    """A rendered document could not be written to its destination."""

    exit_code = ExitCode.IO_ERROR

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Cannot write '{path}': {reason}")
        self.path = Path(path)
        self.reason = reason


class OutputDirectoryError(PagepressError):
    """No usable output directory was given (missing, or not a directory)."""

    exit_code = ExitCode.USAGE_ERROR
