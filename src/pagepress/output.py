# topmark:header:start
#
#   project      : PagePress
#   file         : output.py
#   file_relpath : src/pagepress/output.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output placement, writing, and the post-write helper tools.

Placement rules:

* ``--inplace`` overwrites the input file; the profile's ``out`` extension is
  ignored.
* Otherwise the document goes to the output directory (``--out`` or the
  ``destination`` setting), under its input name with the extension replaced by
  the profile's ``out`` when set. Writing over the input this way is refused.
* Standard input is written to standard output.

After a file has been written, two optional external tools may run:

* `CreatorTagger`: sets the Macintosh creator/type codes with ``SetFile``.
* `XmlLinter`: validates XML output (``xmllint -noout`` by default).

Tool problems are reported as ``TOOL`` diagnostics and never abort a run.
"""

from __future__ import annotations

import shlex
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from pagepress.config.logging import get_logger
from pagepress.core.diagnostics import DiagnosticKind
from pagepress.core.errors import OutputDirectoryError, OutputError

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.config.model import Config
    from pagepress.config.profiles import TypeProfile
    from pagepress.core.diagnostics import DiagnosticLog
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)


def resolve_output_dir(config: Config) -> Path | None:
    """Return the directory rendered files are written to.

    Returns:
        Path | None: The output directory, or ``None`` in ``--inplace`` mode.

    Raises:
        OutputDirectoryError: If no directory is configured, or it does not exist.
    """
    if config.inplace:
        return None
    if config.output_dir is not None:
        out_dir: Path = config.output_dir
    elif config.settings.destination:
        out_dir = Path(config.settings.destination).expanduser()
    else:
        raise OutputDirectoryError(
            "No output directory: use --out DIR, --inplace, or set 'destination'"
        )
    if not out_dir.is_dir():
        raise OutputDirectoryError(f"Output directory does not exist: {out_dir}")
    return out_dir


def output_name(source: Path, profile: TypeProfile, *, inplace: bool) -> str:
    """Return the output file name for ``source`` (``out`` extension applied)."""
    if inplace or not profile.out:
        return source.name
    return source.with_suffix("." + profile.out).name


def resolve_output_path(
    source: Path,
    profile: TypeProfile,
    *,
    output_dir: Path | None,
) -> Path:
    """Return where the rendering of ``source`` is written.

    Args:
        source (Path): Input file.
        profile (TypeProfile): Profile of the input's type.
        output_dir (Path | None): Output directory; ``None`` means in place.

    Returns:
        Path: The destination file.

    Raises:
        OutputError: If the destination is the input file itself outside
            ``--inplace`` mode.
    """
    if output_dir is None:
        return source
    target: Path = output_dir / output_name(source, profile, inplace=False)
    if target.resolve() == source.resolve():
        raise OutputError(target, "refusing to overwrite the input file (use --inplace)")
    return target


class OutputWriter:
    """Write rendered documents to their file, or to ``stream`` for standard input.

    Args:
        stream (TextIO | None): Destination for documents without an output path
            (standard output by default).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream: TextIO = stream if stream is not None else sys.stdout

    def write(self, doc: RenderedDocument) -> None:
        """Write ``doc.output_text``.

        Raises:
            OutputError: If the file cannot be written.
        """
        if doc.output_path is None:
            self.stream.write(doc.output_text)
            self.stream.flush()
            return

        overwriting: bool = doc.output_path.exists()
        try:
            with doc.output_path.open("w", encoding="utf-8", newline="\n") as fh:
                fh.write(doc.output_text)
        except OSError as exc:
            raise OutputError(doc.output_path, exc.strerror or str(exc)) from exc
        logger.info("> %s%s", doc.output_path, " (overwriting)" if overwriting else "")


def _run_tool(argv: list[str]) -> subprocess.CompletedProcess[str]:
    logger.debug("Running %s", shlex.join(argv))
    return subprocess.run(argv, capture_output=True, text=True, check=False)


class CreatorTagger:
    """Apply Macintosh creator and type codes with the ``SetFile`` tool.

    Args:
        executable (str): Path to ``SetFile``; tagging is skipped when it is
            empty or not executable.
    """

    def __init__(self, executable: str) -> None:
        self.executable = executable

    @property
    def available(self) -> bool:
        """Return True when the tool exists on this system."""
        return bool(self.executable) and Path(self.executable).is_file()

    def tag(self, path: Path, creator: str, diagnostics: DiagnosticLog) -> None:
        """Set ``creator`` (and type ``TEXT``) on ``path``."""
        if not creator:
            return
        if not self.available:
            logger.debug("Creator tool %s not available; skipping %s", self.executable, path)
            return
        try:
            result = _run_tool([self.executable, "-c", creator, "-t", "TEXT", str(path)])
        except OSError as exc:
            diagnostics.add_warning(
                f"{path}: cannot run {self.executable}: {exc.strerror or exc}", DiagnosticKind.TOOL
            )
            return
        if result.returncode != 0:
            diagnostics.add_warning(
                f"{path}: setting creator '{creator}' failed ({result.returncode}): "
                f"{result.stderr.strip()}",
                DiagnosticKind.TOOL,
            )


class XmlLinter:
    """Validate XML output with an external command.

    Args:
        command (str): Command line; the file path is appended as last argument.
    """

    def __init__(self, command: str) -> None:
        self.argv: list[str] = shlex.split(command)

    def lint(self, path: Path, diagnostics: DiagnosticLog) -> bool:
        """Lint ``path``; return True when the tool ran and accepted the file."""
        if not self.argv:
            diagnostics.add_warning("No XML lint command configured", DiagnosticKind.TOOL)
            return False
        try:
            result = _run_tool([*self.argv, str(path)])
        except OSError as exc:
            diagnostics.add_warning(
                f"{path}: cannot run XML lint tool {self.argv[0]}: {exc.strerror or exc}",
                DiagnosticKind.TOOL,
            )
            return False
        if result.returncode != 0:
            output: str = (result.stderr or result.stdout).strip()
            diagnostics.add_warning(
                f"{path}: XML lint reported problems ({result.returncode})"
                + (f":\n{output}" if output else ""),
                DiagnosticKind.TOOL,
            )
            return False
        return True
