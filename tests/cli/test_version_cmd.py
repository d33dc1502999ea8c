# topmark:header:start
#
#   project      : PagePress
#   file         : test_version_cmd.py
#   file_relpath : tests/cli/test_version_cmd.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for `pagepress version`."""

from __future__ import annotations

import json

from pagepress.constants import PAGEPRESS_VERSION, PROGRAM_NAME
from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import mark_cli


@mark_cli
def test_version_plain() -> None:
    result = run_cli(["version"])

    assert_SUCCESS(result)
    assert result.stdout.strip() == PAGEPRESS_VERSION


@mark_cli
def test_version_verbose() -> None:
    result = run_cli(["-v", "version"])

    assert_SUCCESS(result)
    assert f"{PROGRAM_NAME} version:" in result.stdout
    assert PAGEPRESS_VERSION in result.stdout


@mark_cli
def test_version_json() -> None:
    result = run_cli(["version", "--json"])

    assert_SUCCESS(result)
    assert json.loads(result.stdout) == {"name": PROGRAM_NAME, "version": PAGEPRESS_VERSION}
