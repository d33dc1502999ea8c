# topmark:header:start
#
#   project      : PagePress
#   file         : keys.py
#   file_relpath : src/pagepress/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for PagePress configuration.

This module defines the authoritative string constants used when reading and
validating PagePress configuration from TOML sources (``pagepress.toml``,
``~/.pagepressrc.toml`` and ``[tool.pagepress]`` in ``pyproject.toml``).

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
    - The per-type keys keep the historical names (``compress``, ``non_ascii``,
      ``textwidth``, ``creator``, ``out``, ``copy_from``) so existing type
      tables can be ported verbatim.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by PagePress configuration.

    Layout::

        [settings]
        add_banner = true
        date_format = "%Y-%m-%d"

        [types.html]
        compress = 2
        textwidth = 80
        copy_from = "default"
    """

    # Nesting inside pyproject.toml
    SECTION_TOOL: Final[str] = "tool"
    SECTION_TOOL_NAME: Final[str] = "pagepress"

    # [settings]
    SECTION_SETTINGS: Final[str] = "settings"

    KEY_ADD_BANNER: Final[str] = "add_banner"
    KEY_DATE_FORMAT: Final[str] = "date_format"
    KEY_DEFAULT_CREATOR: Final[str] = "default_creator"
    KEY_DESTINATION: Final[str] = "destination"
    KEY_MACRO_DELIMITERS: Final[str] = "macro_delimiters"
    KEY_SET_FILE_EXEC: Final[str] = "set_file_exec"
    KEY_XML_LINT_COMMAND: Final[str] = "xml_lint_command"
    KEY_SITE_MODULE: Final[str] = "site_module"
    KEY_LINK_TIMEOUT: Final[str] = "link_timeout"

    # [types.<extension>]
    SECTION_TYPES: Final[str] = "types"

    KEY_INFO: Final[str] = "info"
    KEY_COMPRESS: Final[str] = "compress"
    KEY_NON_ASCII: Final[str] = "non_ascii"
    KEY_TEXTWIDTH: Final[str] = "textwidth"
    KEY_CREATOR: Final[str] = "creator"
    KEY_OUT: Final[str] = "out"
    KEY_COPY_FROM: Final[str] = "copy_from"

    # ---------------------------- Schema helpers ----------------------------

    ALLOWED_TOP_LEVEL_KEYS: Final[frozenset[str]] = frozenset(
        {
            SECTION_SETTINGS,
            SECTION_TYPES,
        }
    )

    ALLOWED_SETTINGS_KEYS: Final[frozenset[str]] = frozenset(
        {
            KEY_ADD_BANNER,
            KEY_DATE_FORMAT,
            KEY_DEFAULT_CREATOR,
            KEY_DESTINATION,
            KEY_MACRO_DELIMITERS,
            KEY_SET_FILE_EXEC,
            KEY_XML_LINT_COMMAND,
            KEY_SITE_MODULE,
            KEY_LINK_TIMEOUT,
        }
    )

    ALLOWED_TYPE_KEYS: Final[frozenset[str]] = frozenset(
        {
            KEY_INFO,
            KEY_COMPRESS,
            KEY_NON_ASCII,
            KEY_TEXTWIDTH,
            KEY_CREATOR,
            KEY_OUT,
            KEY_COPY_FROM,
        }
    )
