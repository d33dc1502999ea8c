# topmark:header:start
#
#   project      : PagePress
#   file         : main.py
#   file_relpath : src/pagepress/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PagePress command-line entry point.

Key ideas:
- Group-level options (verbosity, color) are resolved once and placed into
  ``ctx.obj`` together with the `ClickConsole`.
- Internal logging is configured from the ``PAGEPRESS_LOG_LEVEL`` environment
  variable only; program output verbosity comes from ``-v`` / ``-q``.
"""

from __future__ import annotations

import click

from pagepress.cli.commands.render import render_command
from pagepress.cli.commands.types import types_command
from pagepress.cli.commands.version import version_command
from pagepress.cli.console import ClickConsole
from pagepress.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from pagepress.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, color, console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (str | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_mode = ColorMode.NEVER if no_color else ColorMode(color_mode or ColorMode.AUTO.value)
    enable_color = resolve_color_mode(cli_mode=effective_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="PagePress: compress and format web source files.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the PagePress CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'pagepress render [FILES...]' to render files.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(render_command)

cli.add_command(types_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
