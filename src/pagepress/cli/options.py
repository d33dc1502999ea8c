# topmark:header:start
#
#   project      : PagePress
#   file         : options.py
#   file_relpath : src/pagepress/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, configuration) and
their resolution logic, so commands and groups can stay thin.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

import click

from pagepress.cli.errors import PagepressUsageError
from pagepress.config.logging import get_logger

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)


class OutputFormat(str, Enum):
    """Output formats for listing commands."""

    DEFAULT = "default"
    JSON = "json"
    TOML = "toml"


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        ``-1`` when quiet, ``0`` by default, otherwise the number of ``-v`` flags.

    Raises:
        PagepressUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise PagepressUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Behavior:
        Honors --color and --no-color CLI flags.
        Honors FORCE_COLOR and NO_COLOR environment variables.
        Defaults to enabling color if stdout is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    return bool(stdout_isatty)


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting -v/--verbose and -q/--quiet options (mutually exclusive)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity (per-file details and links).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report errors.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add --color (auto, always, never) and --no-color options."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the configuration discovery options (--config, --no-config)."""
    f = click.option(
        "--config",
        "config_files",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        multiple=True,
        help="Extra configuration file, applied after the discovered ones (repeatable).",
    )(f)
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore the user and project configuration files.",
    )(f)
    return f


def render_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the options of the ``render`` command."""
    f = click.option(
        "--banner/--no-banner",
        "add_banner",
        default=None,
        help="Insert the program banner comment (default: 'add_banner' setting).",
    )(f)
    f = click.option(
        "--href-check",
        "href_check",
        is_flag=True,
        help="Check every hyperlink target (HTTP HEAD for remote URLs).",
    )(f)
    f = click.option(
        "--lint/--no-lint",
        "lint",
        default=True,
        help="Validate XML output with the configured lint command.",
    )(f)
    f = click.option(
        "--out",
        "output_dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Output directory (default: 'destination' setting).",
    )(f)
    f = click.option(
        "--inplace",
        "inplace",
        is_flag=True,
        help="Overwrite the input files.",
    )(f)
    f = click.option(
        "--site",
        "site_module",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Python file providing processing hooks and extra file types.",
    )(f)
    return f
