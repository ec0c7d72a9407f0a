# topmark:header:start
#
#   project      : GetDoc
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the GetDoc test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests never run the real ``cargo``. A Cargo project (`project`) and a Cargo
    home with one registry crate (`cargo_home`, `dep_file`) are laid out under
    ``tmp_path``; the compiler's message stream comes from `tests.fakes`.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import pytest

from getdoc.config import logging
from getdoc.config.model import Config, MutableConfig

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

#: Manifest written by the `project` fixture.
PROJECT_MANIFEST: str = """\
[package]
name = "demo"
version = "0.1.0"
edition = "2021"

[features]
default = ["std"]
std = []
serde = ["dep:serde"]
"""

#: Source of the registry crate file written by the `dep_file` fixture.
DEP_SOURCE: str = """\
//! A tiny dependency.

/// Parses a value.
/// Returns None on failure.
pub fn parse(input: &str) -> Option<u32> {
    input.parse().ok()
}

/// A point.
pub struct Point {
    pub x: i32,
}

impl Point {
    /// Creates a point.
    pub fn new(x: i32) -> Self {
        Self { x }
    }
}
"""


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_getdoc_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure GetDoc's runtime log level is not forced via env during tests.

    Also drops ``CARGO`` so a developer shell running under ``cargo`` does not
    leak its executable path into configuration defaults.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)
    monkeypatch.delenv("CARGO", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure pytest settings and customize logging for the test suite.

    This function sets the logging level to TRACE for all tests,
    ensuring detailed output is captured during test execution.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return the root of a minimal Cargo project.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.

    Returns:
        Path: The canonical project root, holding ``Cargo.toml`` and ``src/lib.rs``.
    """
    root: Path = (tmp_path / "proj").resolve()
    (root / "src").mkdir(parents=True)
    (root / "Cargo.toml").write_text(PROJECT_MANIFEST, encoding="utf-8")
    (root / "src" / "lib.rs").write_text("pub fn demo() {}\n", encoding="utf-8")
    return root


@pytest.fixture
def cargo_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a Cargo home directory outside the project and export it as ``CARGO_HOME``.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture used to set ``CARGO_HOME``.

    Returns:
        Path: The canonical Cargo home.
    """
    home: Path = (tmp_path / "cargo-home").resolve()
    (home / "registry" / "src").mkdir(parents=True)
    (home / "git" / "checkouts").mkdir(parents=True)
    monkeypatch.setenv("CARGO_HOME", str(home))
    return home


@pytest.fixture
def dep_file(cargo_home: Path) -> Path:
    """Return a registry crate source file with a few documented items.

    Args:
        cargo_home (Path): The Cargo home fixture.

    Returns:
        Path: The canonical path of ``tinydep-1.0.0/src/lib.rs``.
    """
    crate_src: Path = cargo_home / "registry" / "src" / "index.crates.io-6f17d22bba15001f"
    path: Path = crate_src / "tinydep-1.0.0" / "src" / "lib.rs"
    path.parent.mkdir(parents=True)
    path.write_text(DEP_SOURCE, encoding="utf-8")
    return path


def make_config(project_root: Path, **overrides: Any) -> Config:
    """Return a frozen `Config` for ``project_root`` built from defaults and overrides.

    Args:
        project_root (Path): The project directory.
        **overrides (Any): Attributes set on the mutable builder before freezing.

    Returns:
        Config: An immutable configuration snapshot for use in tests.
    """
    m: MutableConfig = MutableConfig.from_defaults(project_root=project_root)
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()
