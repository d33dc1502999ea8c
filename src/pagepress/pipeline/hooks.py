# topmark:header:start
#
#   project      : PagePress
#   file         : hooks.py
#   file_relpath : src/pagepress/pipeline/hooks.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Site-supplied processing hooks.

A site may extend rendering with three hooks, each called once per document
with the [`RenderedDocument`][pagepress.pipeline.context.RenderedDocument]
(which exposes ``filename``, ``type_id`` and the mutable ``text`` buffer):

* ``pre_process(doc)``: before prolog detection.
* ``process(doc)``: right after prolog detection, before macro expansion.
* ``post_process(doc)``: after the link scan, just before writing.

Hooks are read from a plain Python file (the *site module*)::

    # site.py
    FILE_TYPES = {"xrc": {"copy_from": "html", "out": "html"}}

    def process(doc):
        doc.text = doc.text.replace("<<author>>", "Jane Doe")

Functions the module does not define are no-ops. ``FILE_TYPES`` (optional) has
the shape of the ``[types]`` configuration table.
"""

from __future__ import annotations

import importlib.util
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from pagepress.config.logging import get_logger
from pagepress.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import ModuleType

    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)

SITE_FILE_TYPES_ATTR = "FILE_TYPES"


class HookStage(Enum):
    """Extension points, named after the hook function they call."""

    PRE = "pre_process"
    MAIN = "process"
    POST = "post_process"


class ProcessingHooks(Protocol):
    """Optional collaborator invoked around the core pipeline."""

    def pre_process(self, doc: RenderedDocument) -> None:
        """Run before prolog detection."""
        ...

    def process(self, doc: RenderedDocument) -> None:
        """Run after prolog detection, before macro expansion."""
        ...

    def post_process(self, doc: RenderedDocument) -> None:
        """Run after the link scan."""
        ...


class NullHooks:
    """Hooks that do nothing."""

    def pre_process(self, doc: RenderedDocument) -> None:
        return None

    def process(self, doc: RenderedDocument) -> None:
        return None

    def post_process(self, doc: RenderedDocument) -> None:
        return None


def _noop(doc: RenderedDocument) -> None:
    return None


class ModuleHooks:
    """Hooks backed by the functions of a loaded site module.

    Missing functions are bound to a no-op once, at construction time.
    """

    def __init__(self, module: ModuleType) -> None:
        self.module_name: str = module.__name__
        self._hooks: dict[HookStage, Callable[[RenderedDocument], None]] = {}
        for stage in HookStage:
            fn: Any = getattr(module, stage.value, None)
            if fn is not None and not callable(fn):
                raise ConfigError(f"Site module attribute '{stage.value}' is not callable")
            self._hooks[stage] = fn or _noop
            logger.debug(
                "Site hook %s.%s: %s", self.module_name, stage.value, "defined" if fn else "no-op"
            )

    def pre_process(self, doc: RenderedDocument) -> None:
        self._hooks[HookStage.PRE](doc)

    def process(self, doc: RenderedDocument) -> None:
        self._hooks[HookStage.MAIN](doc)

    def post_process(self, doc: RenderedDocument) -> None:
        self._hooks[HookStage.POST](doc)


@dataclass(frozen=True)
class SiteModule:
    """A loaded site module.

    Attributes:
        path (Path): Source file.
        hooks (ProcessingHooks): Hook implementation.
        file_types (Mapping[str, Any]): ``FILE_TYPES`` table, or empty.
    """

    path: Path
    hooks: ProcessingHooks
    file_types: Mapping[str, Any] = field(default_factory=lambda: {})


def load_site_module(path: Path | str) -> SiteModule:
    """Import a site module from ``path``.

    Args:
        path (Path | str): Python source file.

    Returns:
        SiteModule: The hooks and extra type tables it defines.

    Raises:
        ConfigError: If the file is missing or fails to import.
    """
    site_path = Path(path)
    if not site_path.is_file():
        raise ConfigError(f"Site module not found: {site_path}")

    spec = importlib.util.spec_from_file_location(f"pagepress_site_{site_path.stem}", site_path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot import site module: {site_path}")

    module: ModuleType = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ConfigError(f"Error while importing site module {site_path}: {exc}") from exc
    logger.info("Loaded site module %s", site_path)

    file_types: Any = getattr(module, SITE_FILE_TYPES_ATTR, None) or {}
    if not isinstance(file_types, dict):
        raise ConfigError(f"Site module {site_path}: {SITE_FILE_TYPES_ATTR} must be a dict")

    return SiteModule(path=site_path, hooks=ModuleHooks(module), file_types=file_types)
