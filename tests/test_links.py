# topmark:header:start
#
#   project      : PagePress
#   file         : test_links.py
#   file_relpath : tests/test_links.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for link scanning and verification (no network access)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import requests

from pagepress.core.diagnostics import DiagnosticKind, DiagnosticLevel, DiagnosticLog
from pagepress.links import LinkChecker, LinkProbeResult, RequestsProbe, scan_links

if TYPE_CHECKING:
    from pathlib import Path


class FakeProbe:
    """Probe answering from a fixed table; unknown URLs are reachable."""

    def __init__(self, broken: dict[str, LinkProbeResult] | None = None) -> None:
        self.broken = broken or {}
        self.calls: list[str] = []

    def head(self, url: str) -> LinkProbeResult:
        self.calls.append(url)
        return self.broken.get(url, LinkProbeResult(url, ok=True, status=200, reason="OK"))


class FakeResponse:
    def __init__(self, status_code: int, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason


class FakeSession(requests.Session):
    """Session whose HEAD answers (or raises) without touching the network."""

    def __init__(self, outcome: FakeResponse | Exception) -> None:
        super().__init__()
        self.outcome = outcome
        self.seen: list[tuple[str, dict[str, object]]] = []

    def head(  # type: ignore[override]
        self, url: str | bytes, **kwargs: object
    ) -> requests.Response:
        self.seen.append((str(url), kwargs))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome  # type: ignore[return-value]


def test_scan_links_unique_in_order() -> None:
    text = '<a href="b.html">b</a><a href="a.html">a</a><link href="b.html"><a name="x">'

    assert scan_links(text) == ["b.html", "a.html"]


def test_remote_links_are_probed(tmp_path: Path) -> None:
    gone = LinkProbeResult("http://gone.test/", False, 404, "Not Found")
    probe = FakeProbe({gone.url: gone})
    log = DiagnosticLog()

    LinkChecker(probe).check(
        ["http://ok.test/", "http://gone.test/"], base_dir=tmp_path, diagnostics=log
    )

    assert probe.calls == ["http://ok.test/", "http://gone.test/"]
    assert [d.message for d in log] == ["Broken link to http://gone.test/ (404 Not Found)"]
    assert log.items[0].kind is DiagnosticKind.LINK


def test_local_links_resolve_against_base_dir(tmp_path: Path) -> None:
    (tmp_path / "here.html").write_text("x", encoding="utf-8")
    log = DiagnosticLog()

    LinkChecker(FakeProbe()).check(
        ["here.html", "here.html?x=1#sec", "missing.html", "#top"],
        base_dir=tmp_path,
        diagnostics=log,
    )

    assert [(d.level, d.message) for d in log] == [
        (DiagnosticLevel.ERROR, 'Broken link to "missing.html"'),
    ]


def test_nonconforming_anchor_is_flagged(tmp_path: Path) -> None:
    (tmp_path / "a.html").write_text("x", encoding="utf-8")
    log = DiagnosticLog()

    LinkChecker(FakeProbe()).check(["a.html#Intro", "#2"], base_dir=tmp_path, diagnostics=log)

    assert [d.level for d in log] == [DiagnosticLevel.WARNING, DiagnosticLevel.WARNING]
    assert log.items[0].message == 'Check anchor "Intro" in "a.html#Intro"'


def test_other_schemes_are_not_checked(tmp_path: Path) -> None:
    probe = FakeProbe()
    log = DiagnosticLog()

    LinkChecker(probe).check(
        ["ftp://files.test/x", "mailto:me@example.com", "javascript:void(0)"],
        base_dir=tmp_path,
        diagnostics=log,
    )

    assert probe.calls == []
    assert [d.level for d in log] == [DiagnosticLevel.INFO]


def test_requests_probe_success_and_redirects() -> None:
    session = FakeSession(FakeResponse(204, "No Content"))
    probe = RequestsProbe(timeout=2.5, session=session)

    result = probe.head("https://ok.test/")

    assert result == LinkProbeResult("https://ok.test/", ok=True, status=204, reason="No Content")
    assert session.seen == [("https://ok.test/", {"allow_redirects": True, "timeout": 2.5})]
    assert "PagePress" in session.headers["User-Agent"]


def test_requests_probe_http_error_status() -> None:
    probe = RequestsProbe(session=FakeSession(FakeResponse(500, "Server Error")))

    result = probe.head("https://bad.test/")

    assert not result.ok
    assert result.status == 500


@pytest.mark.parametrize(
    "exc, reason_part",
    [
        (requests.exceptions.ConnectTimeout("slow"), "timed out"),
        (requests.exceptions.ConnectionError("refused"), "refused"),
    ],
)
def test_requests_probe_network_failures(exc: Exception, reason_part: str) -> None:
    probe = RequestsProbe(timeout=1.0, session=FakeSession(exc))

    result = probe.head("https://down.test/")

    assert not result.ok
    assert result.status is None
    assert reason_part in result.reason
