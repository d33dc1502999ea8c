# topmark:header:start
#
#   project      : PagePress
#   file         : diagnostics.py
#   file_relpath : src/pagepress/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core diagnostic types and helpers for PagePress.

Non-fatal conditions met while resolving the type table or rendering a
document are never raised. They are collected as diagnostics and reported
once processing has finished; the rendered output is still written.

Sections:
    * DiagnosticLevel: severity levels with associated terminal colors.
    * DiagnosticKind: what went wrong (unknown reference, stray macro, ...).
    * Diagnostic: immutable structured diagnostic payload.
    * DiagnosticStats: aggregated per-level counts.
    * DiagnosticLog: mutable per-document collection with helpers for
      adding and summarizing diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from pagepress.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from pagepress.config.logging import PagepressLogger


logger: PagepressLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during processing.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this severity level.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


class DiagnosticKind(Enum):
    """Category of a non-fatal condition.

    Members:
        GENERAL: Informational or uncategorized messages.
        REFERENCE: A ``copy_from`` target or an input file type is unknown;
            the ``default`` type is used instead.
        CYCLE: Types inherit from each other in a loop; they are rebound to ``default``.
        ENCODING: The input used non-UNIX line endings (normalized).
        UNRESOLVED_TOKEN: A macro was left unexpanded in the output.
        LINK: A hyperlink is broken or suspicious.
        TOOL: An external helper (SetFile, xmllint) is missing or failed.
        CONFIG: A configuration value was malformed and ignored.
    """

    GENERAL = "general"
    REFERENCE = "reference"
    CYCLE = "cycle"
    ENCODING = "encoding"
    UNRESOLVED_TOKEN = "unresolved-token"
    LINK = "link"
    TOOL = "tool"
    CONFIG = "config"


@dataclass(frozen=True)
class Diagnostic:
    """Internal structured diagnostic with a severity level and message."""

    level: DiagnosticLevel
    message: str
    kind: DiagnosticKind = DiagnosticKind.GENERAL


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics for one document or one config build.

    Every diagnostic is mirrored to the module logger at the matching level so
    that ``PAGEPRESS_LOG_LEVEL`` exposes them even when the CLI is quiet.
    """

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace(
            "Adding [%s/%s]: %r",
            diagnostic.level.value,
            diagnostic.kind.value,
            diagnostic.message,
        )

    def add_info(self, message: str, kind: DiagnosticKind = DiagnosticKind.GENERAL) -> None:
        """Add an ``info`` diagnostic to the log.

        Args:
            message: The diagnostic message.
            kind: Category of the condition.
        """
        self._add(Diagnostic(DiagnosticLevel.INFO, message, kind))

    def add_warning(self, message: str, kind: DiagnosticKind = DiagnosticKind.GENERAL) -> None:
        """Add a ``warning`` diagnostic to the log.

        Args:
            message: The diagnostic message.
            kind: Category of the condition.
        """
        logger.warning("%s", message)
        self._add(Diagnostic(DiagnosticLevel.WARNING, message, kind))

    def add_error(self, message: str, kind: DiagnosticKind = DiagnosticKind.GENERAL) -> None:
        """Add an ``error`` diagnostic to the log.

        Args:
            message: The diagnostic message.
            kind: Category of the condition.
        """
        logger.error("%s", message)
        self._add(Diagnostic(DiagnosticLevel.ERROR, message, kind))

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Append already-built diagnostics (e.g. from a frozen config)."""
        for d in diagnostics:
            self._add(d)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        """Return the diagnostics of the given kind, in insertion order."""
        return [d for d in self.items if d.kind is kind]

    def stats(self) -> DiagnosticStats:
        """Return per-level counts for diagnostics in this log."""
        return compute_diagnostic_stats(self.items)

    def has_warning(self) -> bool:
        """Return True if the log contains warning diagnostics."""
        return any(d.level == DiagnosticLevel.WARNING for d in self.items)

    def has_error(self) -> bool:
        """Return True if the log contains error diagnostics."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def compute_diagnostic_stats(diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics.

    Args:
        diagnostics: the diagnostic log.

    Returns:
        Per-level counts for diagnostics in this log.
    """
    items: list[Diagnostic] = list(diagnostics)
    n_info: int = sum(1 for d in items if d.level == DiagnosticLevel.INFO)
    n_warn: int = sum(1 for d in items if d.level == DiagnosticLevel.WARNING)
    n_err: int = sum(1 for d in items if d.level == DiagnosticLevel.ERROR)
    return DiagnosticStats(n_info=n_info, n_warning=n_warn, n_error=n_err)
