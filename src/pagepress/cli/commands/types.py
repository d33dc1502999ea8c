# topmark:header:start
#
#   project      : PagePress
#   file         : types.py
#   file_relpath : src/pagepress/cli/commands/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PagePress `types` command.

Lists the resolved type table: every type identifier with its effective
settings after configuration merging and ``copy_from`` inheritance.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from pagepress.cli.commands.render import emit_diagnostics
from pagepress.cli.config_resolver import resolve_render_setup
from pagepress.cli.options import OutputFormat, common_config_options
from pagepress.config.io import dump_toml
from pagepress.config.keys import Toml

if TYPE_CHECKING:
    from pagepress.cli.console import ClickConsole
    from pagepress.config.profiles import ProfileTable


def _render_table(profiles: ProfileTable) -> list[str]:
    headers = ["Type", "Compress", "Non-ASCII", "Width", "Creator", "Out", "Description"]
    rows: list[list[str]] = [
        [
            name,
            str(p.compress),
            "yes" if p.non_ascii else "no",
            str(p.textwidth) if p.textwidth else "-",
            p.creator or "-",
            p.out or "-",
            p.info,
        ]
        for name, p in profiles.items()
    ]
    widths = [max(len(r[i]) for r in [headers, *rows]) for i in range(len(headers))]
    lines = [
        "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip()
        for row in [headers, *rows]
    ]
    lines.insert(1, "  ".join("-" * w for w in widths))
    return lines


@click.command(
    name="types",
    help="List the resolved file types.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.DEFAULT.value,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
@click.option(
    "--site",
    "site_module",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Python file providing extra file types.",
)
@common_config_options
def types_command(
    *,
    output_format: str,
    site_module: Path | None,
    config_files: tuple[Path, ...],
    no_config: bool,
) -> None:
    """List the resolved type table.

    Args:
        output_format (str): ``default`` (table), ``json`` or ``toml``.
        site_module (Path | None): Site module whose ``FILE_TYPES`` are merged in.
        config_files (tuple[Path, ...]): Extra configuration files.
        no_config (bool): Skip user and project configuration discovery.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    setup = resolve_render_setup(
        config_files=config_files,
        no_config=no_config,
        site_module=site_module,
    )
    profiles: ProfileTable = setup.config.profiles
    emit_diagnostics(console, setup.config.diagnostics, vlevel=ctx.obj.get("verbosity_level", 0))

    fmt = OutputFormat(output_format)
    if fmt == OutputFormat.JSON:
        payload: dict[str, Any] = {name: p.to_toml_dict() for name, p in profiles.items()}
        console.print(json.dumps(payload, indent=2))
    elif fmt == OutputFormat.TOML:
        tables: dict[str, Any] = {name: p.to_toml_dict() for name, p in profiles.items()}
        console.print(dump_toml({Toml.SECTION_TYPES: tables}))
    else:
        for line in _render_table(profiles):
            console.print(line)
