# topmark:header:start
#
#   project      : PagePress
#   file         : loaders.py
#   file_relpath : src/pagepress/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides I/O helpers for reading PagePress configuration from:
- the runtime defaults defined in code (including the built-in type table), and
- on-disk TOML files (`pagepress.toml`, `~/.pagepressrc.toml`, `pyproject.toml`).

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from pagepress.config.keys import Toml
from pagepress.config.logging import get_logger
from pagepress.constants import DEFAULT_TYPE, PYPROJECT_CONFIG_NAME
from pagepress.core.diagnostics import DiagnosticKind

from .guards import get_table_value

if TYPE_CHECKING:
    from pathlib import Path

    from pagepress.config.logging import PagepressLogger
    from pagepress.core.diagnostics import DiagnosticLog

    from .types import TomlTable

logger: PagepressLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return PagePress's **runtime defaults** as a Python dict.

    This function performs no I/O. The built-in type table is the base layer
    every configured ``[types.*]`` table is merged onto.

    Returns:
        A TOML-table-compatible dict containing the runtime defaults.

    Notes:
        The returned value is a new dict so callers can mutate it safely.
    """
    return {
        Toml.SECTION_SETTINGS: {
            Toml.KEY_ADD_BANNER: True,
            Toml.KEY_DATE_FORMAT: "%Y-%m-%d",
            Toml.KEY_DEFAULT_CREATOR: "",
            Toml.KEY_DESTINATION: "",
            Toml.KEY_MACRO_DELIMITERS: [["<<", ">>"], ["<:", ":>"]],
            Toml.KEY_SET_FILE_EXEC: "/usr/bin/SetFile",
            Toml.KEY_XML_LINT_COMMAND: "/usr/bin/xmllint -noout",
            Toml.KEY_SITE_MODULE: "",
            Toml.KEY_LINK_TIMEOUT: 10.0,
        },
        Toml.SECTION_TYPES: {
            "css": {
                Toml.KEY_INFO: "Cascading Style Sheet",
                Toml.KEY_COMPRESS: 1,
            },
            "html": {
                Toml.KEY_INFO: "Hypertext Markup Language",
                Toml.KEY_COMPRESS: 2,
                Toml.KEY_NON_ASCII: 1,
                Toml.KEY_TEXTWIDTH: 80,
            },
            "htm": {Toml.KEY_COPY_FROM: "html"},
            "xml": {Toml.KEY_COPY_FROM: "html"},
            "php": {
                Toml.KEY_INFO: "PHP: Hypertext Preprocessor",
                Toml.KEY_COPY_FROM: "html",
            },
            "rss": {
                Toml.KEY_INFO: "Really Simple Syndication",
                Toml.KEY_COPY_FROM: "html",
            },
            DEFAULT_TYPE: {
                Toml.KEY_INFO: "default settings",
                Toml.KEY_COMPRESS: 0,
                # Seeded from settings.default_creator at resolution time
                Toml.KEY_CREATOR: "",
                Toml.KEY_NON_ASCII: 0,
                Toml.KEY_TEXTWIDTH: 0,
            },
        },
    }


def load_toml_dict(path: Path, diagnostics: DiagnosticLog | None = None) -> TomlTable:
    """Load and parse a TOML file from disk.

    For ``pyproject.toml`` files only the ``[tool.pagepress]`` table is
    returned.

    Args:
        path (Path): Path to the TOML file.
        diagnostics (DiagnosticLog | None): Optional collector; unreadable or
            malformed files are recorded as ``CONFIG`` warnings.

    Returns:
        TomlTable: Parsed TOML data as a plain dict, or ``{}`` on failure.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        data: TomlTable = tomlkit.parse(text).unwrap()
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error reading TOML from %s: %s", path, exc)
        if diagnostics is not None:
            diagnostics.add_warning(f"Cannot read config file {path}: {exc}", DiagnosticKind.CONFIG)
        return {}
    except TomlkitParseError as exc:
        logger.error("Error parsing TOML from %s: %s", path, exc)
        if diagnostics is not None:
            diagnostics.add_warning(f"Invalid TOML in {path}: {exc}", DiagnosticKind.CONFIG)
        return {}

    if path.name == PYPROJECT_CONFIG_NAME:
        tool: TomlTable = get_table_value(data, Toml.SECTION_TOOL)
        data = get_table_value(tool, Toml.SECTION_TOOL_NAME)
        logger.trace("Extracted [tool.pagepress] from %s: %r", path, data)
    return data


def dump_toml(data: dict[str, Any]) -> str:
    """Render a plain dict as TOML text (``None`` values are dropped)."""
    def _clean(value: Any) -> Any:
        if isinstance(value, dict):
            return {str(k): _clean(v) for k, v in value.items() if v is not None}
        if isinstance(value, (list, tuple)):
            return [_clean(v) for v in value if v is not None]
        return value

    return tomlkit.dumps(_clean(data))
