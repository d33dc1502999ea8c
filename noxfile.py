# topmark:header:start
#
#   project      : PagePress
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PagePress automation (Nox).

Sessions:
  - `lint` / `format_check`: Ruff checks (the default sessions).
  - `format`: apply Ruff formatting and autofixes.
  - `qa`: pytest (without the slow property tests) and pyright, once per
    supported Python.
  - `property_test`: the ``hypothesis_slow`` property tests.
  - `package_check`: build the sdist and wheel.
"""

from __future__ import annotations

import pathlib
import re
import sys
import tomllib

import nox

CURRENT_PYTHON: str = f"{sys.version_info.major}.{sys.version_info.minor}"
PYPROJECT: pathlib.Path = pathlib.Path(__file__).parent / "pyproject.toml"


def supported_pythons() -> list[str]:
    """Return the ``3.x`` versions listed in the pyproject classifiers."""
    try:
        project = tomllib.loads(PYPROJECT.read_text(encoding="utf-8")).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return [CURRENT_PYTHON]
    versions: set[str] = set()
    for classifier in project.get("classifiers", []):
        match = re.fullmatch(r"Programming Language :: Python :: (3\.\d+)", classifier)
        if match:
            versions.add(match.group(1))
    return sorted(versions, key=lambda v: int(v.split(".")[1])) or [CURRENT_PYTHON]


PYTHONS: list[str] = supported_pythons()

nox.options.sessions = ["lint", "format_check"]


@nox.session
def lint(session: nox.Session) -> None:
    """Static analysis."""
    session.install("-e", ".[dev]")
    session.run("ruff", "check", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Verify formatting."""
    session.install("-e", ".[dev]")
    session.run("ruff", "format", "--check", ".")


@nox.session
def format(session: nox.Session) -> None:
    """Apply formatting and lint autofixes."""
    session.install("-e", ".[dev]")
    session.run("ruff", "check", "--fix", ".")
    session.run("ruff", "format", ".")


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Tests and type checking for one interpreter."""
    session.install("-e", ".[dev]")
    session.run("pytest", "-q", "-m", "not hypothesis_slow", *session.posargs)
    session.run("pyright", "--pythonversion", str(session.python))


@nox.session
def property_test(session: nox.Session) -> None:
    """Long-running rendering properties."""
    session.install("-e", ".[dev]")
    session.run("pytest", "-vv", "-m", "hypothesis_slow", *session.posargs)


@nox.session(python=CURRENT_PYTHON)
def package_check(session: nox.Session) -> None:
    """Build sdist and wheel into a fresh ``dist/``."""
    session.install("build")
    session.run("python", "-c", "import shutil; shutil.rmtree('dist', ignore_errors=True)")
    session.run("python", "-m", "build", "--sdist", "--wheel")
