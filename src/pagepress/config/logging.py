# topmark:header:start
#
#   project      : PagePress
#   file         : logging.py
#   file_relpath : src/pagepress/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PagePress logging: a TRACE level, a logger class, and coloured records.

Logging is reserved for developers. It is switched on with the
``PAGEPRESS_LOG_LEVEL`` environment variable (``TRACE``, ``DEBUG``, ``INFO``,
... or a number) and is silent otherwise. Only the ``pagepress`` logger tree is
configured, so records from ``requests`` and ``urllib3`` stay out of the way.
Records always go to stderr because stdout may carry a rendered document.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from pagepress.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

ROOT_LOGGER_NAME: Final[str] = "pagepress"


class PagepressLogger(logging.Logger):
    """Logger with a ``trace()`` method for per-token step details."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE level.

        Args:
            msg (object): The message format.
            *args (object): Arguments merged into ``msg``.
            extra (Mapping[str, object] | None): Extra record attributes.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(PagepressLogger)

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] %(name)s:%(lineno)d %(message)s"

# Highest threshold first; a record takes the colour of the first level it reaches.
_LEVEL_COLORS: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter colouring each record by severity with `yachalk`."""

    def format(self, record: logging.LogRecord) -> str:
        message: str = super().format(record)
        for threshold, color in _LEVEL_COLORS:
            if record.levelno >= threshold:
                return color(message)
        return chalk.dim(message)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``PAGEPRESS_LOG_LEVEL``, or None if unset or unknown."""
    raw: str = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if not raw:
        return None
    if raw.isdigit():
        return int(raw)
    if raw == "TRACE":
        return TRACE_LEVEL
    return logging.getLevelNamesMapping().get(raw)


def setup_logging(level: int | None = None) -> None:
    """Attach a single stderr handler to the ``pagepress`` logger.

    Args:
        level (int | None): Threshold; ``None`` consults `resolve_env_log_level`
            and falls back to CRITICAL.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    package_logger: logging.Logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(level)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.propagate = False


def get_logger(name: str) -> PagepressLogger:
    """Return the `PagepressLogger` for a module (``get_logger(__name__)``)."""
    return cast("PagepressLogger", logging.getLogger(name))
