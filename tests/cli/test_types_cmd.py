# topmark:header:start
#
#   project      : PagePress
#   file         : test_types_cmd.py
#   file_relpath : tests/cli/test_types_cmd.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for `pagepress types`."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import tomlkit

from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path


@mark_cli
def test_types_table(isolation: Path) -> None:
    result = run_cli(["types", "--no-config"])

    assert_SUCCESS(result)
    lines: list[str] = result.stdout.splitlines()
    assert lines[0].startswith("Type")
    assert set(lines[1]) <= {"-", " "}
    names = [line.split()[0] for line in lines[2:]]
    assert names == sorted(names)
    assert {"css", "default", "htm", "html", "php", "rss", "xml"} <= set(names)


@mark_cli
def test_types_json_reflects_inheritance(isolation: Path) -> None:
    result = run_cli(["types", "--no-config", "--format", "json"])

    assert_SUCCESS(result)
    data = json.loads(result.stdout)
    assert data["xml"]["compress"] == 2
    assert data["xml"]["textwidth"] == 80
    assert data["css"]["non_ascii"] == 0
    assert data["default"]["compress"] == 0


@mark_cli
def test_types_toml_includes_config_and_site(isolation: Path) -> None:
    (isolation / "pagepress.toml").write_text(
        "[types.js]\ncompress = 1\ninfo = \"JavaScript\"\n", encoding="utf-8"
    )
    (isolation / "site.py").write_text(
        'FILE_TYPES = {"xrc": {"copy_from": "html", "out": "html"}}\n', encoding="utf-8"
    )

    result = run_cli(["types", "--format", "toml", "--site", "site.py"])

    assert_SUCCESS(result)
    types = tomlkit.parse(result.stdout)["types"]
    assert types["js"]["compress"] == 1
    assert types["js"]["info"] == "JavaScript"
    assert types["xrc"]["out"] == "html"
    assert types["xrc"]["compress"] == 2
