# topmark:header:start
#
#   project      : PagePress
#   file         : test_site_hooks.py
#   file_relpath : tests/pipeline/test_site_hooks.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for site modules and the processing hooks they provide."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import pytest

from pagepress.core.errors import ConfigError
from pagepress.pipeline import runner
from pagepress.pipeline.context import RenderServices
from pagepress.pipeline.hooks import HookStage, ModuleHooks, NullHooks, load_site_module
from pagepress.pipeline.pipelines import Pipeline
from pagepress.pipeline.steps.hooks import HookStep
from tests.conftest import mark_pipeline
from tests.pipeline.conftest import make_doc

if TYPE_CHECKING:
    from pathlib import Path

    from pagepress.pipeline.context import RenderedDocument

SITE_SOURCE = """\
FILE_TYPES = {"xrc": {"copy_from": "html", "out": "html"}}

calls = []

def pre_process(doc):
    calls.append(("pre", doc.text))
    doc.text = doc.text.replace("<<author>>", "Jane")

def post_process(doc):
    calls.append(("post", list(doc.links)))
"""


class RecordingHooks:
    def __init__(self) -> None:
        self.seen: list[tuple[str, str]] = []

    def pre_process(self, doc: RenderedDocument) -> None:
        self.seen.append(("pre", doc.text))

    def process(self, doc: RenderedDocument) -> None:
        self.seen.append(("main", doc.text))

    def post_process(self, doc: RenderedDocument) -> None:
        self.seen.append(("post", doc.text))


def _write_site(tmp_path: Path, source: str) -> Path:
    path = tmp_path / "site.py"
    path.write_text(textwrap.dedent(source), encoding="utf-8")
    return path


def test_load_site_module(tmp_path: Path) -> None:
    site = load_site_module(_write_site(tmp_path, SITE_SOURCE))

    assert site.path == tmp_path / "site.py"
    assert dict(site.file_types) == {"xrc": {"copy_from": "html", "out": "html"}}
    assert isinstance(site.hooks, ModuleHooks)


def test_missing_site_module(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_site_module(tmp_path / "absent.py")


def test_site_module_import_failure(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="importing"):
        load_site_module(_write_site(tmp_path, "raise RuntimeError('boom')\n"))


def test_site_module_with_bad_attributes(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not callable"):
        load_site_module(_write_site(tmp_path, "process = 42\n"))
    with pytest.raises(ConfigError, match="FILE_TYPES"):
        load_site_module(_write_site(tmp_path, "FILE_TYPES = ['xrc']\n"))


@mark_pipeline
def test_hook_step_calls_the_matching_hook() -> None:
    hooks = RecordingHooks()
    doc = make_doc("<p>x</p>", services=RenderServices(hooks=hooks))

    HookStep(name="MainHookStep", stage=HookStage.MAIN)(doc)

    assert hooks.seen == [("main", "<p>x</p>")]
    assert doc.steps == ["MainHookStep"]


@mark_pipeline
def test_null_hooks_change_nothing() -> None:
    doc = make_doc("<p>x</p>", services=RenderServices(hooks=NullHooks()))

    HookStep(name="PreHookStep", stage=HookStage.PRE)(doc)

    assert doc.text == "<p>x</p>"


@mark_pipeline
def test_hooks_run_around_the_render_pipeline() -> None:
    hooks = RecordingHooks()
    doc = make_doc(
        "<p>\r\n<a href=\"x.html\">x</a></p>",
        type_id="default",
        services=RenderServices(hooks=hooks),
    )

    runner.run(doc, Pipeline.RENDER.steps)

    stages = [stage for stage, _ in hooks.seen]
    assert stages == ["pre", "main", "post"]
    # the main hook sees normalized line breaks
    assert hooks.seen[0][1] == "<p>\r\n<a href=\"x.html\">x</a></p>"
    assert hooks.seen[1][1] == "<p>\n<a href=\"x.html\">x</a></p>"
    assert doc.links == ["x.html"]


@mark_pipeline
def test_module_hooks_fill_in_missing_functions(tmp_path: Path) -> None:
    site = load_site_module(_write_site(tmp_path, SITE_SOURCE))
    doc = make_doc(
        '<p><<author>> <a href="a.html">a</a></p>',
        type_id="default",
        services=RenderServices(hooks=site.hooks),
    )

    runner.run(doc, Pipeline.RENDER.steps)

    assert doc.text == '<p>Jane <a href="a.html">a</a></p>'
    assert not doc.diagnostics.has_error()
