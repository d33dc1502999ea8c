# topmark:header:start
#
#   project      : PagePress
#   file         : guards.py
#   file_relpath : src/pagepress/config/io/guards.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type guards and normalization helpers for TOML parsing.

`tomlkit` hands back its own container types (``Table``, ``Array``, ...) which
subclass the builtin ``dict``/``list``. The helpers here narrow those values for
Pyright and convert sub-tables to plain Python dicts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard

from pagepress.config.logging import get_logger

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger

    from .types import TomlTable, TomlTableMap


logger: PagepressLogger = get_logger(__name__)


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        obj (object): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``obj`` is a ``dict[str, Any]``.
    """
    return isinstance(obj, dict)


def is_any_list(obj: object) -> TypeGuard[list[Any]]:
    """Type guard for a generic list value (item types are not checked)."""
    return isinstance(obj, list)


def is_str_list(obj: object) -> TypeGuard[list[str]]:
    """Type guard for a ``list[str]`` value."""
    return is_any_list(obj) and all(isinstance(x, str) for x in obj)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table stored under ``key``, or an empty dict.

    Args:
        table (TomlTable): Parent table.
        key (str): Sub-table name.

    Returns:
        TomlTable: The sub-table as a plain dict, or ``{}`` if missing or not a table.
    """
    value: Any | None = table.get(key)
    if is_toml_table(value):
        return dict(value)
    if value is not None:
        logger.debug("Expected table for key %s, got %r; ignoring", key, value)
    return {}


def as_toml_table_map(obj: object) -> TomlTableMap:
    """Normalize a mapping of sub-tables (e.g. ``[types.*]``) to plain dicts.

    Entries whose value is not a table are dropped with a debug log.

    Args:
        obj (object): Value to normalize.

    Returns:
        TomlTableMap: Mapping of name to plain-dict table.
    """
    if not is_toml_table(obj):
        return {}
    out: TomlTableMap = {}
    for name, value in obj.items():
        if is_toml_table(value):
            out[str(name)] = dict(value)
        else:
            logger.debug("Ignoring non-table entry %r in table map", name)
    return out
