# topmark:header:start
#
#   project      : PagePress
#   file         : test_io.py
#   file_relpath : tests/config/test_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TOML I/O helpers in `pagepress.config.io`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tomlkit

from pagepress.config.io import (
    dump_toml,
    get_bool_value_or_none_checked,
    get_float_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_pairs_checked,
    load_toml_dict,
)
from pagepress.core.diagnostics import DiagnosticLog

if TYPE_CHECKING:
    from pathlib import Path


def test_dump_toml_drops_none_and_parses_back() -> None:
    text: str = dump_toml({"types": {"html": {"compress": 2, "out": None, "info": "HTML"}}})
    parsed: Any = tomlkit.parse(text).unwrap()

    assert parsed == {"types": {"html": {"compress": 2, "info": "HTML"}}}


def test_bool_getter_does_not_coerce_ints() -> None:
    log = DiagnosticLog()

    assert get_bool_value_or_none_checked({"a": 1}, "a", where="[s]", diagnostics=log) is None
    assert get_bool_value_or_none_checked({"a": True}, "a", where="[s]", diagnostics=log) is True
    assert len(log) == 1
    assert "[s].a" in log.items[0].message


def test_int_getter_rejects_bools_and_out_of_range() -> None:
    log = DiagnosticLog()
    table = {"flag": True, "big": 9, "ok": 1}

    assert get_int_value_or_none_checked(table, "flag", where="[t]", diagnostics=log) is None
    assert (
        get_int_value_or_none_checked(table, "big", where="[t]", diagnostics=log, maximum=2)
        is None
    )
    assert get_int_value_or_none_checked(table, "ok", where="[t]", diagnostics=log) == 1
    assert get_int_value_or_none_checked(table, "missing", where="[t]", diagnostics=log) is None
    assert len(log) == 2


def test_float_getter_accepts_positive_ints() -> None:
    log = DiagnosticLog()
    table = {"t": 3, "neg": -1.0}

    assert get_float_value_or_none_checked(table, "t", where="[s]", diagnostics=log) == 3.0
    assert get_float_value_or_none_checked(table, "neg", where="[s]", diagnostics=log) is None
    assert len(log) == 1


def test_string_pairs_keep_valid_entries() -> None:
    log = DiagnosticLog()
    table = {"d": [["{{", "}}"], ["", "x"], "nope"]}

    pairs = get_string_pairs_checked(table, "d", where="[s]", diagnostics=log)

    assert pairs == [("{{", "}}")]
    assert len(log) == 2


def test_string_pairs_not_a_list() -> None:
    log = DiagnosticLog()

    assert get_string_pairs_checked({"d": "<<"}, "d", where="[s]", diagnostics=log) is None
    assert log.has_warning()


def test_load_toml_dict_missing_file(tmp_path: Path) -> None:
    log = DiagnosticLog()

    assert load_toml_dict(tmp_path / "absent.toml", log) == {}
    assert log.has_warning()
