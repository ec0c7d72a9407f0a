# topmark:header:start
#
#   project      : GetDoc
#   file         : paths.py
#   file_relpath : src/getdoc/core/paths.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Classify span file paths as in-project, third-party, or unclassifiable.

A file counts as third-party only when its canonical path is outside the
project root, inside one of the recognized dependency roots (by default the
Cargo registry sources and git checkouts under ``CARGO_HOME``), and is an
existing regular file. Anything that cannot be canonicalized is dropped
silently: a file that vanished between the build and the classification is
simply not accounted for.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from getdoc.config.logging import get_logger
from getdoc.constants import CARGO_GIT_CHECKOUTS, CARGO_REGISTRY_SRC

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from getdoc.config.logging import GetdocLogger

logger: GetdocLogger = get_logger(__name__)


class FileOrigin(str, Enum):
    """Classification tag for a file referenced by a diagnostic span."""

    IN_PROJECT = "in_project"
    THIRD_PARTY = "third_party"
    UNCLASSIFIABLE = "unclassifiable"


@dataclass(frozen=True, slots=True)
class ClassifiedFile:
    """Result of classifying one span path.

    Attributes:
        origin (FileOrigin): The classification tag.
        path (Path | None): The canonical path, or ``None`` when canonicalization failed.
    """

    origin: FileOrigin
    path: Path | None = None

    @property
    def is_third_party(self) -> bool:
        """Return True if the file lives in a recognized dependency root."""
        return self.origin is FileOrigin.THIRD_PARTY


def resolve_cargo_home(environ: Mapping[str, str] | None = None) -> Path | None:
    """Return Cargo's home directory (``$CARGO_HOME`` or ``~/.cargo``).

    Returns ``None`` when no home directory can be determined.
    """
    env: Mapping[str, str] = os.environ if environ is None else environ
    cargo_home: str | None = env.get("CARGO_HOME")
    if cargo_home:
        return Path(cargo_home).expanduser()
    try:
        return Path.home() / ".cargo"
    except RuntimeError:
        logger.debug("Cannot determine the home directory; no default Cargo home")
        return None


def default_dependency_roots(cargo_home: Path | None) -> tuple[Path, ...]:
    """Return the Cargo registry and git checkout source roots below ``cargo_home``."""
    if cargo_home is None:
        return ()
    return (
        cargo_home.joinpath(*CARGO_REGISTRY_SRC),
        cargo_home.joinpath(*CARGO_GIT_CHECKOUTS),
    )


def _canonical_root(root: Path) -> Path:
    # Roots need not exist; a missing root simply never matches.
    try:
        return root.resolve()
    except (OSError, RuntimeError):
        return root.absolute()


class PathClassifier:
    """Classify span paths against a project root and a set of dependency roots.

    Args:
        project_root (Path): Root of the project being probed; relative span paths
            are resolved against it.
        dependency_roots (Iterable[Path]): Directories whose files count as third-party.
    """

    project_root: Path
    dependency_roots: tuple[Path, ...]

    def __init__(self, project_root: Path, dependency_roots: Iterable[Path]) -> None:
        self.project_root = _canonical_root(project_root)
        self.dependency_roots = tuple(_canonical_root(r) for r in dependency_roots)

    def __repr__(self) -> str:
        return (
            f"PathClassifier(project_root={self.project_root!r}, "
            f"dependency_roots={self.dependency_roots!r})"
        )

    def classify(self, file_name: str | Path) -> ClassifiedFile:
        """Classify one span path.

        Args:
            file_name (str | Path): The path as reported by the compiler.

        Returns:
            ClassifiedFile: The classification; ``path`` is set whenever the file
                could be canonicalized.
        """
        candidate = Path(file_name)
        if not candidate.is_absolute():
            candidate = self.project_root / candidate

        try:
            canonical: Path = candidate.resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            logger.trace("Cannot canonicalize %s: %s", candidate, exc)
            return ClassifiedFile(FileOrigin.UNCLASSIFIABLE)

        if canonical.is_relative_to(self.project_root):
            return ClassifiedFile(FileOrigin.IN_PROJECT, canonical)

        in_dependency_root: bool = any(canonical.is_relative_to(r) for r in self.dependency_roots)
        if in_dependency_root and canonical.is_file():
            return ClassifiedFile(FileOrigin.THIRD_PARTY, canonical)

        return ClassifiedFile(FileOrigin.UNCLASSIFIABLE, canonical)
