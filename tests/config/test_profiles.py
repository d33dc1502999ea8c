# topmark:header:start
#
#   project      : PagePress
#   file         : test_profiles.py
#   file_relpath : tests/config/test_profiles.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for type profile parsing and ``copy_from`` resolution."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pagepress.config.io import load_defaults_dict
from pagepress.config.io.guards import as_toml_table_map
from pagepress.config.keys import Toml
from pagepress.config.profiles import (
    MutableProfile,
    TypeProfile,
    parse_type_tables,
    profile_for_type,
    resolve_profiles,
)
from pagepress.core.diagnostics import DiagnosticKind, DiagnosticLog
from pagepress.core.errors import ConfigError


def _builtin_table() -> dict[str, MutableProfile]:
    log = DiagnosticLog()
    tables = as_toml_table_map(load_defaults_dict()[Toml.SECTION_TYPES])
    table = parse_type_tables(tables, log)
    assert len(log) == 0
    return table


def test_builtin_types_resolve_without_diagnostics() -> None:
    log = DiagnosticLog()
    profiles = resolve_profiles(_builtin_table(), diagnostics=log)

    assert len(log) == 0
    assert set(profiles) == {"css", "default", "htm", "html", "php", "rss", "xml"}


def test_inherited_fields_follow_the_copy_from_chain() -> None:
    """``htm`` copies ``html``, which copies ``default``."""
    profiles = resolve_profiles(_builtin_table())
    htm: TypeProfile = profiles["htm"]

    assert htm.compress == 2
    assert htm.non_ascii is True
    assert htm.textwidth == 80
    assert htm.info == "Hypertext Markup Language"
    assert htm.name == "htm"


def test_types_without_copy_from_inherit_from_default() -> None:
    profiles = resolve_profiles(_builtin_table())
    css: TypeProfile = profiles["css"]

    assert css.compress == 1
    assert css.non_ascii is False
    assert css.textwidth == 0


def test_own_fields_win_over_parent_fields() -> None:
    table = _builtin_table()
    table["xml"] = MutableProfile(copy_from="html", textwidth=0, out="xhtml")
    profiles = resolve_profiles(table)

    assert profiles["xml"].textwidth == 0
    assert profiles["xml"].compress == 2
    assert profiles["xml"].out == "xhtml"


def test_unknown_parent_is_reported_and_rebound_to_default() -> None:
    table = _builtin_table()
    table["txt"] = MutableProfile(copy_from="nope", info="plain text")
    log = DiagnosticLog()
    profiles = resolve_profiles(table, diagnostics=log)

    refs = log.of_kind(DiagnosticKind.REFERENCE)
    assert len(refs) == 1
    assert "nope" in refs[0].message
    assert profiles["txt"].compress == 0
    assert profiles["txt"].info == "plain text"


def test_cycle_members_are_reported_and_resolution_terminates() -> None:
    table = _builtin_table()
    table["a"] = MutableProfile(copy_from="b", compress=1)
    table["b"] = MutableProfile(copy_from="a")
    table["c"] = MutableProfile(copy_from="a")
    log = DiagnosticLog()
    profiles = resolve_profiles(table, diagnostics=log)

    cycles = log.of_kind(DiagnosticKind.CYCLE)
    assert sorted(d.message.split("'")[1] for d in cycles) == ["a", "b"]
    assert log.has_error()
    # Rebound to default, then the hanging type resolves through "a"
    assert profiles["a"].compress == 1
    assert profiles["b"].compress == 0
    assert profiles["c"].compress == 1


def test_self_reference_is_a_cycle() -> None:
    table = _builtin_table()
    table["loop"] = MutableProfile(copy_from="loop")
    log = DiagnosticLog()
    resolve_profiles(table, diagnostics=log)

    assert len(log.of_kind(DiagnosticKind.CYCLE)) == 1


def test_default_never_inherits() -> None:
    table = _builtin_table()
    table["default"].copy_from = "html"
    profiles = resolve_profiles(table)

    assert profiles["default"].compress == 0


def test_missing_default_raises() -> None:
    table = _builtin_table()
    del table["default"]

    with pytest.raises(ConfigError):
        resolve_profiles(table)


def test_profile_for_unknown_type_falls_back_to_default() -> None:
    profiles = resolve_profiles(_builtin_table())
    log = DiagnosticLog()

    profile = profile_for_type(profiles, "shtml", log)

    assert profile.name == "default"
    assert [d.kind for d in log] == [DiagnosticKind.REFERENCE]


def test_profile_table_is_read_only() -> None:
    profiles = resolve_profiles(_builtin_table())

    with pytest.raises(TypeError):
        profiles["new"] = profiles["default"]  # type: ignore[index]


def test_malformed_type_values_are_ignored_with_warnings() -> None:
    log = DiagnosticLog()
    profile = MutableProfile.from_toml_table(
        "html",
        {"compress": 5, "textwidth": "wide", "out": ".xhtml", "colour": "red"},
        log,
    )

    assert profile.compress is None
    assert profile.textwidth is None
    assert profile.out == "xhtml"
    kinds = {d.kind for d in log}
    assert kinds == {DiagnosticKind.CONFIG}
    assert len(log) == 3


def test_non_ascii_integer_flag_becomes_bool() -> None:
    log = DiagnosticLog()
    on = MutableProfile.from_toml_table("a", {"non_ascii": 1}, log)
    off = MutableProfile.from_toml_table("b", {"non_ascii": 0}, log)

    assert on.non_ascii is True
    assert off.non_ascii is False


def test_merge_with_overrides_only_set_fields() -> None:
    base = MutableProfile(info="x", compress=2, textwidth=80)
    merged = base.merge_with(MutableProfile(textwidth=0))

    assert merged.compress == 2
    assert merged.textwidth == 0
    assert base.textwidth == 80


def test_thaw_round_trips_through_freeze() -> None:
    profiles = resolve_profiles(_builtin_table())
    html: TypeProfile = profiles["html"]

    assert html.thaw().freeze("html") == html


def test_to_toml_dict_omits_unset_out() -> None:
    profiles = resolve_profiles(_builtin_table())
    data = profiles["html"].to_toml_dict()

    assert "out" not in data
    assert data["non_ascii"] == 1


_TYPE_NAMES = ["html", "htm", "css", "xml"]
_profiles = st.builds(
    MutableProfile,
    info=st.none() | st.text(alphabet="abc ", max_size=6),
    compress=st.none() | st.integers(min_value=0, max_value=2),
    non_ascii=st.none() | st.booleans(),
    textwidth=st.none() | st.integers(min_value=0, max_value=120),
    creator=st.none() | st.sampled_from(["", "R*ch", "MOSS"]),
    out=st.none() | st.sampled_from(["shtml", "xhtml"]),
    copy_from=st.none() | st.sampled_from([*_TYPE_NAMES, "default", "missing"]),
)
_tables = st.fixed_dictionaries(
    {"default": _profiles},
    optional={name: _profiles for name in _TYPE_NAMES},
)


@given(table=_tables)
def test_resolving_a_resolved_table_changes_nothing(table: dict[str, MutableProfile]) -> None:
    first = resolve_profiles(table)

    log = DiagnosticLog()
    second = resolve_profiles({name: p.thaw() for name, p in first.items()}, diagnostics=log)

    assert dict(second) == dict(first)
    assert len(log) == 0
