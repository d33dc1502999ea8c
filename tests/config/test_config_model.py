# topmark:header:start
#
#   project      : PagePress
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for configuration layering and freezing (`MutableConfig` -> `Config`)."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from pagepress.config.model import Config, MutableConfig
from pagepress.core.diagnostics import DiagnosticKind, DiagnosticLog
from pagepress.core.errors import ConfigError
from tests.conftest import FIXED_NOW, make_config


def test_defaults_freeze_cleanly() -> None:
    cfg: Config = MutableConfig.from_defaults().freeze(now=FIXED_NOW)

    assert cfg.diagnostics == ()
    assert cfg.settings.add_banner is True
    assert cfg.settings.link_timeout == 10.0
    assert cfg.short_date == "2025-03-14"
    assert cfg.long_date == FIXED_NOW.strftime("%c")
    assert cfg.href_check is False
    assert cfg.lint is True
    assert cfg.inplace is False


def test_empty_date_format_uses_long_date() -> None:
    cfg = make_config(date_format="")

    assert cfg.short_date == cfg.long_date


def test_default_creator_seeds_the_default_type() -> None:
    cfg = make_config(default_creator="R*ch")

    assert cfg.profiles["default"].creator == "R*ch"
    assert cfg.profiles["html"].creator == "R*ch"


def test_type_override_changes_one_field() -> None:
    cfg = make_config(types={"html": {"textwidth": 0}})

    assert cfg.profiles["html"].textwidth == 0
    assert cfg.profiles["html"].compress == 2
    # children see the change
    assert cfg.profiles["htm"].textwidth == 0


def test_later_layer_overrides_earlier_layer() -> None:
    low = MutableConfig.from_toml_dict(
        {"settings": {"destination": "/srv/low", "add_banner": False}}
    )
    high = MutableConfig.from_toml_dict({"settings": {"destination": "/srv/high"}})

    merged = MutableConfig.from_defaults().merge_with(low).merge_with(high)
    cfg = merged.freeze(now=FIXED_NOW)

    assert cfg.settings.destination == "/srv/high"
    assert cfg.settings.add_banner is False


def test_unknown_keys_are_reported_not_fatal() -> None:
    draft = MutableConfig.from_toml_dict({"settings": {"colour": "blue"}, "extras": {}})
    cfg = MutableConfig.from_defaults().merge_with(draft).freeze(now=FIXED_NOW)

    config_warnings = [d for d in cfg.diagnostics if d.kind is DiagnosticKind.CONFIG]
    assert len(config_warnings) == 2


def test_macro_delimiters_from_toml() -> None:
    draft = MutableConfig.from_toml_dict(
        {"settings": {"macro_delimiters": [["[[", "]]"], ["bad"]]}}
    )
    cfg = MutableConfig.from_defaults().merge_with(draft).freeze(now=FIXED_NOW)

    assert cfg.settings.macro_syntax.delimiters == (("[[", "]]"),)
    assert len(cfg.diagnostics) == 1


def test_relative_site_module_is_anchored_at_config_file(tmp_path: Path) -> None:
    cfg_file = tmp_path / "conf" / "pagepress.toml"
    cfg_file.parent.mkdir()
    cfg_file.write_text('[settings]\nsite_module = "site.py"\n', encoding="utf-8")

    draft = MutableConfig.from_toml_file(cfg_file)

    assert draft.site_module == str(tmp_path / "conf" / "site.py")
    assert draft.config_files == [cfg_file]


def test_pyproject_only_reads_tool_table(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(
        '[project]\nname = "x"\n\n[tool.pagepress.settings]\ndestination = "out"\n',
        encoding="utf-8",
    )

    draft = MutableConfig.from_toml_file(pyproject)

    assert draft.destination == "out"
    assert len(draft.diagnostics) == 0


def test_invalid_toml_yields_a_warning(tmp_path: Path) -> None:
    bad = tmp_path / "pagepress.toml"
    bad.write_text("[settings\n", encoding="utf-8")

    draft = MutableConfig.from_toml_file(bad)

    assert [d.kind for d in draft.diagnostics] == [DiagnosticKind.CONFIG]


def test_discovery_order_and_no_config(tmp_path: Path) -> None:
    home = tmp_path / "home"
    proj = tmp_path / "proj"
    home.mkdir()
    proj.mkdir()
    (home / ".pagepressrc.toml").write_text(
        '[settings]\ndestination = "from-home"\ndate_format = "%d.%m.%Y"\n', encoding="utf-8"
    )
    (proj / "pagepress.toml").write_text(
        '[settings]\ndestination = "from-project"\n', encoding="utf-8"
    )

    found = MutableConfig.discover_config_files(proj, home)
    assert [p.name for p in found] == [".pagepressrc.toml", "pagepress.toml"]

    merged = MutableConfig.load_merged(cwd=proj, home=home).freeze(now=FIXED_NOW)
    assert merged.settings.destination == "from-project"
    assert merged.short_date == "14.03.2025"

    bare = MutableConfig.load_merged(no_config=True, cwd=proj, home=home).freeze(now=FIXED_NOW)
    assert bare.settings.destination == ""


def test_explicit_config_files_are_merged_last(tmp_path: Path) -> None:
    (tmp_path / "pagepress.toml").write_text(
        "[types.html]\ntextwidth = 60\n", encoding="utf-8"
    )
    extra = tmp_path / "extra.toml"
    extra.write_text("[types.html]\ntextwidth = 100\n", encoding="utf-8")

    cfg = MutableConfig.load_merged(
        extra_config_files=[extra], cwd=tmp_path, home=tmp_path / "nohome"
    ).freeze(now=FIXED_NOW)

    assert cfg.profiles["html"].textwidth == 100


def test_apply_type_tables_adds_types() -> None:
    draft = MutableConfig.from_defaults()
    draft.apply_type_tables({"xrc": {"copy_from": "html", "out": "html"}}, source="site.py")
    cfg = draft.freeze(now=FIXED_NOW)

    assert cfg.profiles["xrc"].compress == 2
    assert cfg.profiles["xrc"].out == "html"
    assert "site.py" in cfg.config_files


def test_freeze_without_default_type_raises() -> None:
    draft = MutableConfig.from_defaults()
    del draft.base_types["default"]

    with pytest.raises(ConfigError):
        draft.freeze()


def test_config_is_immutable() -> None:
    cfg = make_config()

    with pytest.raises(AttributeError):
        cfg.inplace = True  # type: ignore[misc]


def test_to_toml_dict_lists_settings_and_types() -> None:
    cfg = make_config(types={"xml": {"out": "xhtml"}})
    data = cfg.to_toml_dict()

    assert data["settings"]["macro_delimiters"] == [["<<", ">>"], ["<:", ":>"]]
    assert data["types"]["xml"]["out"] == "xhtml"


def test_profile_for_reports_unknown_types() -> None:
    cfg = make_config()
    log = DiagnosticLog()
    assert cfg.profile_for("nope", log).name == "default"
    assert log.has_error()


def test_mutable_profile_override_via_helper() -> None:
    """The test helper merges field-wise instead of replacing the type."""
    cfg = make_config(types={"php": {"compress": 1}})

    assert cfg.profiles["php"].compress == 1
    assert cfg.profiles["php"].info == "PHP: Hypertext Preprocessor"


def test_timestamp_defaults_to_draft_creation() -> None:
    draft = MutableConfig.from_defaults()
    cfg = draft.freeze()

    assert isinstance(cfg.timestamp, datetime)
    assert cfg.timestamp == draft.timestamp
