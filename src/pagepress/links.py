# topmark:header:start
#
#   project      : PagePress
#   file         : links.py
#   file_relpath : src/pagepress/links.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Hyperlink scanning and verification.

`scan_links()` lists the unique ``href="..."`` targets of a rendered buffer in
order of first appearance. `LinkChecker` verifies them:

* ``http://`` / ``https://`` URLs are probed with an HTTP ``HEAD`` request
  through an injected `HttpProbe` (`RequestsProbe` by default).
* Relative targets must exist on disk, relative to the output directory.
  A ``#fragment`` is split off first; fragments that do not follow the
  three-lowercase-letter anchor naming convention (``#sec2``, ``#fig-1``)
  are flagged for a manual check.
* ``ftp://`` and other schemes (``mailto:``, ``javascript:``) are not checked.

Problems are reported as ``LINK`` diagnostics; they never abort a run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol

import requests

from pagepress.config.logging import get_logger
from pagepress.constants import PAGEPRESS_VERSION, PROGRAM_NAME
from pagepress.core.diagnostics import DiagnosticKind

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from pagepress.config.logging import PagepressLogger
    from pagepress.core.diagnostics import DiagnosticLog

logger: PagepressLogger = get_logger(__name__)

HREF_RE: Final[re.Pattern[str]] = re.compile(r'href="([^"]+)"')
HTTP_URL_RE: Final[re.Pattern[str]] = re.compile(r"^https?://", re.IGNORECASE)
FTP_URL_RE: Final[re.Pattern[str]] = re.compile(r"^ftp://", re.IGNORECASE)
SCHEME_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
ANCHOR_CONVENTION_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z]{3}\b")

DEFAULT_TIMEOUT: Final[float] = 10.0
USER_AGENT: Final[str] = f"{PROGRAM_NAME}/{PAGEPRESS_VERSION} link-check"


def scan_links(text: str) -> list[str]:
    """Return the unique ``href`` targets of ``text`` in first-occurrence order."""
    return list(dict.fromkeys(HREF_RE.findall(text)))


@dataclass(frozen=True)
class LinkProbeResult:
    """Outcome of probing one remote URL.

    Attributes:
        url (str): The probed URL.
        ok (bool): The server answered with a 2xx status (after redirects).
        status (int | None): Final HTTP status, or ``None`` on network failure.
        reason (str): Status reason or exception text.
    """

    url: str
    ok: bool
    status: int | None = None
    reason: str = ""


class HttpProbe(Protocol):
    """Anything able to answer "is this URL reachable?"."""

    def head(self, url: str) -> LinkProbeResult:
        """Probe ``url`` with a ``HEAD`` request."""
        ...


class RequestsProbe:
    """`HttpProbe` backed by a `requests.Session`.

    Args:
        timeout (float): Seconds to wait for each response.
        session (requests.Session | None): Session to reuse (a new one by default).
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self.session: requests.Session = session if session is not None else requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    def head(self, url: str) -> LinkProbeResult:
        try:
            response = self.session.head(url, allow_redirects=True, timeout=self.timeout)
        except requests.exceptions.Timeout:
            return LinkProbeResult(url, ok=False, reason=f"timed out after {self.timeout}s")
        except requests.exceptions.RequestException as exc:
            return LinkProbeResult(url, ok=False, reason=str(exc))
        logger.trace("HEAD %s -> %s", url, response.status_code)
        return LinkProbeResult(
            url,
            ok=200 <= response.status_code < 300,
            status=response.status_code,
            reason=response.reason or "",
        )


class LinkChecker:
    """Verify link targets, reporting problems into a diagnostic log.

    Args:
        probe (HttpProbe): Collaborator for remote URLs.
    """

    def __init__(self, probe: HttpProbe) -> None:
        self.probe = probe

    def check(self, links: Iterable[str], *, base_dir: Path, diagnostics: DiagnosticLog) -> None:
        """Check every link in ``links``.

        Args:
            links (Iterable[str]): Unique link targets.
            base_dir (Path): Directory relative targets are resolved against.
            diagnostics (DiagnosticLog): Collector for ``LINK`` diagnostics.
        """
        for link in links:
            self.check_link(link, base_dir=base_dir, diagnostics=diagnostics)

    def check_link(self, link: str, *, base_dir: Path, diagnostics: DiagnosticLog) -> None:
        """Check a single link target."""
        if HTTP_URL_RE.match(link):
            self._check_remote(link, diagnostics)
        elif FTP_URL_RE.match(link):
            diagnostics.add_info(f"Not checking FTP link {link}", DiagnosticKind.LINK)
        elif SCHEME_RE.match(link):
            logger.debug("Skipping link %s", link)
        else:
            self._check_local(link, base_dir, diagnostics)

    def _check_remote(self, url: str, diagnostics: DiagnosticLog) -> None:
        result: LinkProbeResult = self.probe.head(url)
        if result.ok:
            return
        detail: str = f"{result.status} {result.reason}".strip() if result.status else result.reason
        diagnostics.add_error(f"Broken link to {url} ({detail})", DiagnosticKind.LINK)

    def _check_local(self, link: str, base_dir: Path, diagnostics: DiagnosticLog) -> None:
        target, _, anchor = link.partition("#")
        target = target.split("?", 1)[0]
        if anchor and not ANCHOR_CONVENTION_RE.match(anchor):
            diagnostics.add_warning(
                f'Check anchor "{anchor}" in "{link}"',
                DiagnosticKind.LINK,
            )
        if not target:
            return
        if not (base_dir / target).exists():
            diagnostics.add_error(f'Broken link to "{target}"', DiagnosticKind.LINK)
