# topmark:header:start
#
#   project      : GetDoc
#   file         : model.py
#   file_relpath : src/getdoc/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GetDoc's own warnings and errors.

Recoverable failures (a manifest that does not parse, a configuration whose
build could not start, a dependency file that could not be inspected) are
recorded as tool diagnostics: they are printed on the console and listed at
the end of the report. Compiler diagnostics live in `getdoc.core.model`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from yachalk import chalk

from getdoc.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from getdoc.config.logging import GetdocLogger

logger: GetdocLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity of a tool diagnostic."""

    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` style used for console output."""
        return chalk.yellow if self is DiagnosticLevel.WARNING else chalk.red_bright


@dataclass(frozen=True)
class Diagnostic:
    """One tool diagnostic."""

    level: DiagnosticLevel
    message: str


@dataclass
class DiagnosticLog:
    """Tool diagnostics of one run, in the order they were recorded."""

    items: list[Diagnostic] = field(default_factory=list)

    def _add(self, level: DiagnosticLevel, message: str) -> None:
        self.items.append(Diagnostic(level, message))
        logger.trace("Recorded %s: %r", level.value, message)

    def add_warning(self, message: str) -> None:
        """Record a failure GetDoc recovered from."""
        self._add(DiagnosticLevel.WARNING, message)

    def add_error(self, message: str) -> None:
        """Record a failure that cost the report some of its data."""
        self._add(DiagnosticLevel.ERROR, message)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def count_by_level(diagnostics: Iterable[Diagnostic]) -> dict[str, int]:
    """Return the number of diagnostics per level value, zero for absent levels."""
    counts: dict[str, int] = {level.value: 0 for level in DiagnosticLevel}
    for diagnostic in diagnostics:
        counts[diagnostic.level.value] += 1
    return counts
