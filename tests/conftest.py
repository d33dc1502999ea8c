# topmark:header:start
#
#   project      : PagePress
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the PagePress test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    configs with `MutableConfig` (see `make_mutable_config`), then ``freeze()``
    them into a `Config` (see `make_config`). Do not mutate a frozen `Config`.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from pagepress.config import logging
from pagepress.config.model import MutableConfig
from pagepress.config.profiles import MutableProfile

if TYPE_CHECKING:
    from pathlib import Path

    from pagepress.config.model import Config

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

# Fixed clock for reproducible date macros.
FIXED_NOW: datetime = datetime(2025, 3, 14, 15, 9, 26)


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@fixture(autouse=True)
def silence_pagepress_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level and colors are not forced via env during tests."""
    monkeypatch.delenv("PAGEPRESS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    """Set the log level to TRACE so every step is exercised with logging on."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@fixture()
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an empty project directory with an empty home directory.

    Returns:
        Path: The working directory (``tmp_path / "proj"``).
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    home: Path = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(cwd)
    monkeypatch.setenv("HOME", str(home))
    return cwd


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return a mutable builder populated with the defaults.

    Keyword arguments are set verbatim on the builder, except ``types`` which
    is a ``{type_id: {field: value}}`` mapping merged over the type table.
    Banners are off unless requested.

    Args:
        **overrides (Any): Builder attributes to set.

    Returns:
        MutableConfig: The builder.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    m.add_banner = False
    types: dict[str, dict[str, Any]] = overrides.pop("types", {})
    for k, v in overrides.items():
        setattr(m, k, v)
    for name, values in types.items():
        override = MutableProfile(**values)
        current: MutableProfile | None = m.type_overrides.get(name)
        m.type_overrides[name] = current.merge_with(override) if current else override
    return m


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides (fixed clock)."""
    return make_mutable_config(**overrides).freeze(now=FIXED_NOW)
