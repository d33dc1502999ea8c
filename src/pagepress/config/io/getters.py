# topmark:header:start
#
#   project      : PagePress
#   file         : getters.py
#   file_relpath : src/pagepress/config/io/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Checked value getters for TOML config tables.

Each getter validates the expected shape of a single key. A value of the wrong
type is reported as a ``CONFIG`` warning in the supplied `DiagnosticLog` (which
also logs it) and treated as *unset*, so the lower-precedence layer keeps its
value. None of these helpers raise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from pagepress.core.diagnostics import DiagnosticKind

from .guards import is_any_list, is_str_list

if TYPE_CHECKING:
    from pagepress.core.diagnostics import DiagnosticLog

    from .types import TomlTable


def _reject(
    diagnostics: DiagnosticLog,
    loc: str,
    expected: str,
    value: Any,
) -> None:
    diagnostics.add_warning(
        f"Expected {expected} in {loc}, got {type(value).__name__}: {value!r}",
        DiagnosticKind.CONFIG,
    )


def get_string_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> str | None:
    """Return an optional string value, warning when present but not `str`.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        where (str): TOML location prefix used in messages (e.g. ``"[types.html]"``).
        diagnostics (DiagnosticLog): Collector for shape warnings.

    Returns:
        str | None: The string value, or ``None`` when missing or malformed.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return str(value)
    _reject(diagnostics, f"{where}.{key}", "string", value)
    return None


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> bool | None:
    """Return an optional boolean value, warning when present but not `bool`.

    Integers are **not** coerced.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return bool(value)
    _reject(diagnostics, f"{where}.{key}", "bool", value)
    return None


def get_int_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int | None:
    """Return an optional int value, warning when present but not a usable `int`.

    Notes:
        - Missing key -> None
        - `bool` is rejected (since `bool` is a subclass of `int`).
        - Values outside ``[minimum, maximum]`` are rejected.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"
    if isinstance(value, bool) or not isinstance(value, int):
        _reject(diagnostics, loc, "int", value)
        return None

    number = int(value)
    if (minimum is not None and number < minimum) or (maximum is not None and number > maximum):
        diagnostics.add_warning(
            f"Value out of range in {loc}: {number} (allowed: {minimum}..{maximum})",
            DiagnosticKind.CONFIG,
        )
        return None
    return number


def get_float_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> float | None:
    """Return an optional positive number as `float` (ints are accepted)."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        _reject(diagnostics, f"{where}.{key}", "positive number", value)
        return None
    return float(value)


def get_string_pairs_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> list[tuple[str, str]] | None:
    """Return a list of ``[open, close]`` string pairs.

    Malformed entries are dropped with a warning. ``None`` is returned when the
    key is missing or no valid pair remains.

    Example:
        ``macro_delimiters = [["<<", ">>"], ["<:", ":>"]]``
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"
    if not is_any_list(value):
        _reject(diagnostics, loc, "list", value)
        return None

    pairs: list[tuple[str, str]] = []
    for entry in value:
        if is_str_list(entry) and len(entry) == 2 and all(entry):
            pairs.append((str(entry[0]), str(entry[1])))
        else:
            diagnostics.add_warning(
                f"Ignoring malformed delimiter pair in {loc}: {entry!r}",
                DiagnosticKind.CONFIG,
            )
    return pairs or None


def warn_unknown_keys(
    table: TomlTable,
    allowed: frozenset[str],
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> None:
    """Record a warning for every key in ``table`` that is not in ``allowed``."""
    for key in sorted(set(table) - allowed):
        diagnostics.add_warning(f"Unknown key {where}.{key} ignored", DiagnosticKind.CONFIG)
