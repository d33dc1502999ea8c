# topmark:header:start
#
#   project      : PagePress
#   file         : context.py
#   file_relpath : src/pagepress/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-document processing state.

`RenderedDocument` is created once per input, mutated by every pipeline step and
discarded after it has been written. Besides the text buffer it carries the
derived state later steps depend on (XML detection, doctype mode, whether
wrapping is still allowed), the masking store, and the diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pagepress.config.logging import get_logger
from pagepress.core.diagnostics import DiagnosticLog
from pagepress.pipeline.hooks import NullHooks
from pagepress.text.masking import MaskingCodec

if TYPE_CHECKING:
    from pathlib import Path

    from pagepress.config.logging import PagepressLogger
    from pagepress.config.model import Config
    from pagepress.config.profiles import TypeProfile
    from pagepress.links import LinkChecker
    from pagepress.pipeline.hooks import ProcessingHooks

logger: PagepressLogger = get_logger(__name__)


@dataclass(frozen=True)
class RenderServices:
    """External collaborators available to the pipeline.

    Attributes:
        hooks (ProcessingHooks): Site-supplied pre/main/post processing hooks.
        link_checker (LinkChecker | None): Verifies link targets; ``None``
            disables checking even when requested.
    """

    hooks: ProcessingHooks = field(default_factory=NullHooks)
    link_checker: LinkChecker | None = None


@dataclass
class RenderedDocument:
    """Mutable state of one document while it is being rendered.

    Attributes:
        source (str): Input path as given, or ``"-"`` for standard input.
        filename (str): Output file name (after any ``out`` extension rename);
            expanded by the ``file`` macro.
        type_id (str): Resolved type identifier.
        profile (TypeProfile): Settings for ``type_id``.
        config (Config): Run configuration.
        text (str): The buffer being rewritten.
        services (RenderServices): External collaborators.
        output_path (Path | None): Destination file; ``None`` means standard output.
        is_xml (bool): The document is XML/XHTML.
        xml_version (str): Version declared in the XML prolog.
        doctype_mode (str | None): Mode of the synthesized doctype (``strict``, ...).
        wrap_enabled (bool): Line wrapping is still allowed.
        masks (MaskingCodec): Regions shielded from destructive steps.
        links (list[str]): Unique ``href`` targets, in order of appearance.
        diagnostics (DiagnosticLog): Non-fatal findings for this document.
        steps (list[str]): Names of the steps that ran, in order.
    """

    source: str
    filename: str
    type_id: str
    profile: TypeProfile
    config: Config
    text: str
    services: RenderServices = field(default_factory=RenderServices)
    output_path: Path | None = None
    is_xml: bool = False
    xml_version: str = "1.0"
    doctype_mode: str | None = None
    wrap_enabled: bool = True
    masks: MaskingCodec = field(default_factory=MaskingCodec)
    links: list[str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    steps: list[str] = field(default_factory=lambda: [])

    @property
    def is_css(self) -> bool:
        """Return True for style sheets (type ``css``)."""
        return self.type_id == "css"

    @property
    def output_text(self) -> str:
        """Return the final buffer terminated by exactly one trailing newline."""
        return self.text if self.text.endswith("\n") else self.text + "\n"

    @classmethod
    def bootstrap(
        cls,
        *,
        source: str,
        text: str,
        type_id: str,
        config: Config,
        services: RenderServices | None = None,
        output_path: Path | None = None,
        diagnostics: DiagnosticLog | None = None,
    ) -> RenderedDocument:
        """Create a document with its initial derived state.

        The profile is looked up for ``type_id`` (falling back to ``default``).
        XML mode starts on for the ``xml`` type; wrapping starts on when the
        profile has a positive ``textwidth``.

        Args:
            source (str): Input path as given, or ``"-"``.
            text (str): Raw input text.
            type_id (str): Type detected from the input name.
            config (Config): Run configuration.
            services (RenderServices | None): External collaborators.
            output_path (Path | None): Destination file (``None`` = stdout).
            diagnostics (DiagnosticLog | None): Log to continue, e.g. with the
                type-detection findings.

        Returns:
            RenderedDocument: The new document.
        """
        log: DiagnosticLog = diagnostics if diagnostics is not None else DiagnosticLog()
        profile: TypeProfile = config.profile_for(type_id, log)
        filename: str = output_path.name if output_path is not None else source
        return cls(
            source=source,
            filename=filename,
            type_id=profile.name,
            profile=profile,
            config=config,
            text=text,
            services=services if services is not None else RenderServices(),
            output_path=output_path,
            is_xml=profile.name == "xml",
            wrap_enabled=profile.textwidth > 0,
            diagnostics=log,
        )
