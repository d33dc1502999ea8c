# topmark:header:start
#
#   project      : PagePress
#   file         : version.py
#   file_relpath : src/pagepress/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PagePress `version` command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from pagepress.constants import PAGEPRESS_VERSION, PROGRAM_NAME

if TYPE_CHECKING:
    from pagepress.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of PagePress.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the version as a JSON object.",
)
def version_command(*, as_json: bool = False) -> None:
    """Print the PagePress version installed in the current environment."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    if as_json:
        console.print(json.dumps({"name": PROGRAM_NAME, "version": PAGEPRESS_VERSION}))
    elif ctx.obj.get("verbosity_level", 0) > 0:
        console.print(console.styled(f"{PROGRAM_NAME} version:", bold=True, underline=True))
        console.print(f"    {console.styled(PAGEPRESS_VERSION, bold=True)}")
    else:
        console.print(console.styled(PAGEPRESS_VERSION, bold=True))
