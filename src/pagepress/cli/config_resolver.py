# topmark:header:start
#
#   project      : PagePress
#   file         : config_resolver.py
#   file_relpath : src/pagepress/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build the run configuration and services from Click parameters.

This module bridges CLI parsing and the core configuration system: it merges
the default, user, project and ``--config`` layers, applies command-line
overrides, loads the site module (if any) and freezes the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from pagepress.cli.errors import PagepressConfigError
from pagepress.config.logging import get_logger
from pagepress.config.model import MutableConfig
from pagepress.core.errors import ConfigError
from pagepress.links import LinkChecker, RequestsProbe
from pagepress.pipeline.context import RenderServices
from pagepress.pipeline.hooks import NullHooks, load_site_module

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pagepress.config.logging import PagepressLogger
    from pagepress.config.model import Config
    from pagepress.pipeline.hooks import ProcessingHooks

logger: PagepressLogger = get_logger(__name__)


@dataclass(frozen=True)
class RenderSetup:
    """Frozen configuration plus the collaborators built from it."""

    config: Config
    services: RenderServices


def resolve_render_setup(
    *,
    config_files: Iterable[Path] = (),
    no_config: bool = False,
    add_banner: bool | None = None,
    href_check: bool | None = None,
    lint: bool | None = None,
    inplace: bool | None = None,
    output_dir: Path | None = None,
    site_module: Path | None = None,
) -> RenderSetup:
    """Resolve the configuration and services for a command.

    Command-line values override every configuration file; ``None`` leaves
    the configured value untouched.

    Returns:
        RenderSetup: The frozen config and the render services.

    Raises:
        PagepressConfigError: If the configuration or the site module is unusable.
    """
    draft: MutableConfig = MutableConfig.load_merged(
        extra_config_files=config_files,
        no_config=no_config,
    )
    overrides = MutableConfig(
        add_banner=add_banner,
        href_check=href_check,
        lint=lint,
        inplace=inplace,
        output_dir=output_dir,
        site_module=str(site_module) if site_module is not None else None,
    )
    draft = draft.merge_with(overrides)

    hooks: ProcessingHooks = NullHooks()
    try:
        if draft.site_module:
            site = load_site_module(Path(draft.site_module).expanduser())
            hooks = site.hooks
            if site.file_types:
                draft.apply_type_tables(site.file_types, source=str(site.path))
        config: Config = draft.freeze()
    except ConfigError as exc:
        raise PagepressConfigError(str(exc)) from exc

    link_checker: LinkChecker | None = None
    if config.href_check:
        link_checker = LinkChecker(RequestsProbe(timeout=config.settings.link_timeout))
    services = RenderServices(hooks=hooks, link_checker=link_checker)
    return RenderSetup(config=config, services=services)
