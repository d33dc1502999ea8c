# topmark:header:start
#
#   project      : PagePress
#   file         : __init__.py
#   file_relpath : src/pagepress/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for PagePress configuration.

This package centralizes **pure** helpers for reading and validating TOML used
by PagePress's configuration layer. Keeping these utilities separate avoids
import cycles and keeps the model classes small.

Typical flow:
    1. Load the runtime defaults (``load_defaults_dict``).
    2. Load user/project TOML files (``load_toml_dict``).
    3. Read values with the checked getters, which record malformed values as
       warnings instead of raising.

PagePress uses `tomlkit` for both parsing and rendering.
"""

from __future__ import annotations

from .getters import (
    get_bool_value_or_none_checked,
    get_float_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_pairs_checked,
    get_string_value_or_none_checked,
    warn_unknown_keys,
)
from .guards import as_toml_table_map, get_table_value, is_any_list, is_str_list, is_toml_table
from .loaders import dump_toml, load_defaults_dict, load_toml_dict
from .types import TomlTable, TomlTableMap

__all__: list[str] = [
    "TomlTable",
    "TomlTableMap",
    "as_toml_table_map",
    "dump_toml",
    "get_bool_value_or_none_checked",
    "get_float_value_or_none_checked",
    "get_int_value_or_none_checked",
    "get_string_pairs_checked",
    "get_string_value_or_none_checked",
    "get_table_value",
    "is_any_list",
    "is_str_list",
    "is_toml_table",
    "load_defaults_dict",
    "load_toml_dict",
    "warn_unknown_keys",
]
