# topmark:header:start
#
#   project      : PagePress
#   file         : render.py
#   file_relpath : src/pagepress/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PagePress `render` command.

Renders each input through the full pipeline and writes it to the output
directory (``--out`` or the ``destination`` setting), over the input
(``--inplace``), or to stdout for standard input (``-``).

Diagnostics are printed to stderr once all inputs have been processed. The
exit status is non-zero when a fatal error stopped the run, or when any
document carries an error diagnostic (its output is written regardless).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pagepress.cli.config_resolver import resolve_render_setup
from pagepress.cli.errors import PagepressUsageError, from_pagepress_error
from pagepress.cli.options import common_config_options, render_options
from pagepress.core.diagnostics import DiagnosticLevel, compute_diagnostic_stats
from pagepress.core.exit_codes import ExitCode
from pagepress.output import OutputWriter
from pagepress.pipeline.engine import render_files

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from pagepress.cli.console import ClickConsole, ConsoleLike
    from pagepress.core.diagnostics import Diagnostic
    from pagepress.pipeline.context import RenderedDocument


def emit_diagnostics(
    console: ConsoleLike,
    diagnostics: Iterable[Diagnostic],
    *,
    vlevel: int,
) -> None:
    """Print diagnostics; info only when verbose, errors only when quiet."""
    for d in diagnostics:
        if d.level is DiagnosticLevel.ERROR:
            console.error(f"Error: {d.message}")
        elif d.level is DiagnosticLevel.WARNING and vlevel >= 0:
            console.warn(f"Warning: {d.message}")
        elif d.level is DiagnosticLevel.INFO and vlevel > 0:
            text = f"Info: {d.message}"
            console.info(d.level.color(text) if console.enable_color else text)


def emit_document_summary(console: ConsoleLike, doc: RenderedDocument) -> None:
    """Print the per-document details shown with ``-v``."""
    console.info(f"< {doc.source}")
    console.info(f"\tfile type: {doc.type_id} ({doc.profile.info})")
    console.info(f"\tcompress : {'on' if doc.profile.compress > 0 else 'off'}")
    console.info(f"\tnon_ascii: {'on' if doc.profile.non_ascii else 'off'}")
    if doc.links:
        console.info("- Links:")
        for link in doc.links:
            console.info(f"\t{link}")
    console.info(f"> {doc.output_path if doc.output_path is not None else '(stdout)'}")


@click.command(
    name="render",
    help="Render web source files.",
    epilog="""
Use '-' to read a document from standard input; it is rendered with the
'default' type and written to standard output.
""",
)
@click.argument("sources", nargs=-1, type=str)
@render_options
@common_config_options
def render_command(
    *,
    sources: tuple[str, ...],
    add_banner: bool | None,
    href_check: bool,
    lint: bool,
    output_dir: Path | None,
    inplace: bool,
    site_module: Path | None,
    config_files: tuple[Path, ...],
    no_config: bool,
) -> None:
    """Render the given inputs.

    Args:
        sources (tuple[str, ...]): Input files; ``-`` reads standard input.
        add_banner (bool | None): Override of the ``add_banner`` setting.
        href_check (bool): Verify every link target.
        lint (bool): Lint XML output.
        output_dir (Path | None): Output directory.
        inplace (bool): Overwrite the inputs.
        site_module (Path | None): Site module overriding the configured one.
        config_files (tuple[Path, ...]): Extra configuration files.
        no_config (bool): Skip user and project configuration discovery.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    if not sources:
        raise PagepressUsageError("No input files given (use '-' for standard input).")
    if inplace and output_dir is not None:
        raise PagepressUsageError("The '--inplace' and '--out' options are mutually exclusive.")

    setup = resolve_render_setup(
        config_files=config_files,
        no_config=no_config,
        add_banner=add_banner,
        href_check=href_check,
        lint=lint,
        inplace=inplace,
        output_dir=output_dir,
        site_module=site_module,
    )
    emit_diagnostics(console, setup.config.diagnostics, vlevel=vlevel)

    docs, error = render_files(
        sources=list(sources),
        config=setup.config,
        services=setup.services,
        writer=OutputWriter(click.get_text_stream("stdout")),
        stdin=click.get_text_stream("stdin"),
    )

    all_diagnostics: list[Diagnostic] = []
    for doc in docs:
        if vlevel > 0:
            emit_document_summary(console, doc)
        emit_diagnostics(console, doc.diagnostics, vlevel=vlevel)
        all_diagnostics.extend(doc.diagnostics)

    stats = compute_diagnostic_stats(all_diagnostics)
    if vlevel > 0:
        console.info(
            f"{len(docs)} file(s) rendered: {stats.n_error} error(s), {stats.n_warning} warning(s)"
        )
    failed: bool = stats.n_error > 0

    if error is not None:
        raise from_pagepress_error(error)
    if failed:
        ctx.exit(ExitCode.FAILURE)
