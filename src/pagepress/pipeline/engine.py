# topmark:header:start
#
#   project      : PagePress
#   file         : engine.py
#   file_relpath : src/pagepress/pipeline/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Execution helpers for rendering a list of inputs (engine layer).

This module renders one or more inputs and writes the results. It is shared by
the CLI and by library callers.

Design goals:
  - No CLI dependencies: nothing from ``click`` or ``pagepress.cli`` is imported
    here. Presentation (printing diagnostics, exiting) belongs to the CLI layer.
  - Inputs are processed strictly one at a time, in order. The first fatal
    error (unreadable input, unwritable output) stops the run; the documents
    completed so far are still returned.

Typical usage:

    docs, error = render_files(sources=["index.html"], config=cfg)
    if error is not None:
        ...  # error.exit_code tells how the run failed
"""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, TextIO

from pagepress.config.logging import get_logger
from pagepress.constants import DEFAULT_TYPE, STDIN_NAME
from pagepress.core.diagnostics import DiagnosticLog
from pagepress.core.errors import InputError, PagepressError
from pagepress.core.exit_codes import ExitCode
from pagepress.output import (
    CreatorTagger,
    OutputWriter,
    XmlLinter,
    resolve_output_dir,
    resolve_output_path,
)
from pagepress.pipeline import runner
from pagepress.pipeline.context import RenderedDocument, RenderServices
from pagepress.pipeline.pipelines import Pipeline

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pagepress.config.logging import PagepressLogger
    from pagepress.config.model import Config
    from pagepress.config.profiles import TypeProfile
    from pagepress.pipeline.contracts import Step

logger: PagepressLogger = get_logger(__name__)

_EXTENSION_RE: Final[re.Pattern[str]] = re.compile(r"\.(\w+)$")


def detect_type(path: Path | str) -> str:
    """Return the type identifier of ``path``: its extension, or ``default``."""
    match: re.Match[str] | None = _EXTENSION_RE.search(Path(path).name)
    return match.group(1) if match else DEFAULT_TYPE


def read_source(path: Path) -> str:
    """Read ``path`` as UTF-8, keeping its line endings.

    Raises:
        InputError: If the file is missing, unreadable or not valid UTF-8.
    """
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise InputError(path, "no such file", exit_code=ExitCode.FILE_NOT_FOUND) from exc
    except PermissionError as exc:
        raise InputError(path, "permission denied", exit_code=ExitCode.PERMISSION_DENIED) from exc
    except UnicodeDecodeError as exc:
        raise InputError(
            path, f"not valid UTF-8 ({exc.reason})", exit_code=ExitCode.ENCODING_ERROR
        ) from exc
    except OSError as exc:
        raise InputError(path, exc.strerror or str(exc)) from exc


def read_stdin(stream: TextIO) -> str:
    """Read all of ``stream``.

    Raises:
        InputError: If the stream cannot be decoded.
    """
    try:
        return stream.read()
    except UnicodeDecodeError as exc:
        raise InputError(
            STDIN_NAME, f"not valid UTF-8 ({exc.reason})", exit_code=ExitCode.ENCODING_ERROR
        ) from exc


def load_document(
    source: str,
    *,
    config: Config,
    services: RenderServices | None = None,
    output_dir: Path | None = None,
    stdin: TextIO | None = None,
) -> RenderedDocument:
    """Read ``source`` and prepare its document.

    Standard input (``"-"``) always uses the ``default`` type and renders to
    standard output.

    Args:
        source (str): Input path, or ``"-"``.
        config (Config): Run configuration.
        services (RenderServices | None): External collaborators.
        output_dir (Path | None): Output directory; ``None`` renders in place.
        stdin (TextIO | None): Stream read for ``"-"`` (``sys.stdin`` by default).

    Returns:
        RenderedDocument: The bootstrapped document.

    Raises:
        InputError: If the input cannot be read.
        OutputError: If the destination would overwrite the input.
    """
    if source == STDIN_NAME:
        return RenderedDocument.bootstrap(
            source=source,
            text=read_stdin(stdin if stdin is not None else sys.stdin),
            type_id=DEFAULT_TYPE,
            config=config,
            services=services,
        )

    path = Path(source)
    diagnostics = DiagnosticLog()
    profile: TypeProfile = config.profile_for(detect_type(path), diagnostics)
    output_path: Path = resolve_output_path(path, profile, output_dir=output_dir)
    return RenderedDocument.bootstrap(
        source=source,
        text=read_source(path),
        type_id=profile.name,
        config=config,
        services=services,
        output_path=output_path,
        diagnostics=diagnostics,
    )


def render_text(
    text: str,
    *,
    config: Config,
    type_id: str = DEFAULT_TYPE,
    filename: str = STDIN_NAME,
    pipeline: Sequence[Step] = Pipeline.TEXT.steps,
) -> RenderedDocument:
    """Render an in-memory buffer (nothing is read or written).

    Args:
        text (str): Raw document text.
        config (Config): Run configuration.
        type_id (str): Type to render as.
        filename (str): Name expanded by the ``file`` macros.
        pipeline (Sequence[Step]): Steps to run (text rewriting only by default).

    Returns:
        RenderedDocument: The rendered document; see ``output_text``.
    """
    doc: RenderedDocument = RenderedDocument.bootstrap(
        source=filename,
        text=text,
        type_id=type_id,
        config=config,
    )
    return runner.run(doc, pipeline)


def finish_document(doc: RenderedDocument) -> None:
    """Run the post-write tools (creator tagging, XML lint) on a written file."""
    if doc.output_path is None:
        return
    settings = doc.config.settings
    CreatorTagger(settings.set_file_exec).tag(doc.output_path, doc.profile.creator, doc.diagnostics)
    if doc.config.lint and doc.is_xml:
        XmlLinter(settings.xml_lint_command).lint(doc.output_path, doc.diagnostics)


def render_files(
    *,
    sources: Sequence[str],
    config: Config,
    services: RenderServices | None = None,
    pipeline: Sequence[Step] = Pipeline.RENDER.steps,
    writer: OutputWriter | None = None,
    stdin: TextIO | None = None,
) -> tuple[list[RenderedDocument], PagepressError | None]:
    """Render, write and post-process every input, in order.

    Args:
        sources (Sequence[str]): Input paths; ``"-"`` reads standard input.
        config (Config): Run configuration.
        services (RenderServices | None): External collaborators.
        pipeline (Sequence[Step]): Steps to run per document.
        writer (OutputWriter | None): Writer (files, and stdout for ``"-"``).
        stdin (TextIO | None): Stream read for ``"-"``.

    Returns:
        tuple[list[RenderedDocument], PagepressError | None]: The documents
        written, and the fatal error that stopped the run (``None`` on success).
        ``error.exit_code`` is suitable for a process exit status.
    """
    results: list[RenderedDocument] = []
    out: OutputWriter = writer if writer is not None else OutputWriter()

    try:
        output_dir: Path | None = None
        if any(source != STDIN_NAME for source in sources):
            output_dir = resolve_output_dir(config)

        for source in sources:
            doc: RenderedDocument = load_document(
                source,
                config=config,
                services=services,
                output_dir=output_dir,
                stdin=stdin,
            )
            doc = runner.run(doc, pipeline)
            out.write(doc)
            finish_document(doc)
            results.append(doc)
    except PagepressError as exc:
        logger.error("%s", exc)
        return results, exc

    return results, None
