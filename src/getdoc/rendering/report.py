# topmark:header:start
#
#   project      : GetDoc
#   file         : report.py
#   file_relpath : src/getdoc/rendering/report.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Renderer-facing snapshot of a finished session, and report writing.

`Report` freezes everything the renderers need (sorted diagnostics, the
explanation map, sorted third-party files with their backreferences and
extracted items, tool diagnostics) so that the Markdown and JSON renderers
are pure functions of it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from getdoc.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import datetime
    from pathlib import Path

    from getdoc.config.logging import GetdocLogger
    from getdoc.core.model import AggregatedDiagnostic, FileOriginRecord
    from getdoc.core.session import Session
    from getdoc.diagnostic.model import Diagnostic
    from getdoc.extract.rust import ExtractedItem

logger: GetdocLogger = get_logger(__name__)


def mode_description(focus_features: Sequence[str] | None) -> str:
    """Return the human-readable run mode shown in the report title."""
    if focus_features is None:
        return "Comprehensive Mode"
    if not focus_features:
        return "Targeted Mode (Context specified, using crate defaults)"
    return f"Targeted Mode for Features: `{', '.join(focus_features)}`"


@dataclass(frozen=True, slots=True)
class Report:
    """Immutable input of the report renderers.

    Attributes:
        mode (str): Run mode description (see `mode_description`).
        generated_at (datetime): Timezone-aware generation time.
        configurations (tuple[str, ...]): Descriptors of the probed configurations, in order.
        diagnostics (tuple[AggregatedDiagnostic, ...]): Consolidated diagnostics, sorted.
        explanations (Mapping[str, str]): Code → explanation.
        files (tuple[Path, ...]): Implicated third-party files, sorted.
        backrefs (Mapping[Path, tuple[FileOriginRecord, ...]]): Sorted backreferences per file.
        extracted (Mapping[Path, tuple[ExtractedItem, ...]]): Extracted items per file;
            files whose extraction failed are absent.
        tool_diagnostics (tuple[Diagnostic, ...]): GetDoc's own warnings and errors.
    """

    mode: str
    generated_at: datetime
    configurations: tuple[str, ...]
    diagnostics: tuple[AggregatedDiagnostic, ...]
    explanations: Mapping[str, str]
    files: tuple[Path, ...]
    backrefs: Mapping[Path, tuple[FileOriginRecord, ...]]
    extracted: Mapping[Path, tuple[ExtractedItem, ...]]
    tool_diagnostics: tuple[Diagnostic, ...]

    @property
    def is_empty(self) -> bool:
        """Return True if there is neither a diagnostic nor a third-party file to report."""
        return not self.diagnostics and not self.files

    def items_for(self, path: Path) -> tuple[ExtractedItem, ...]:
        """Return the items extracted from ``path`` (empty if none or on failure)."""
        return self.extracted.get(path, ())

    @classmethod
    def from_session(
        cls,
        session: Session,
        *,
        extracted: Mapping[Path, Sequence[ExtractedItem]],
        focus_features: Sequence[str] | None,
        generated_at: datetime,
        extra_diagnostics: Sequence[Diagnostic] = (),
    ) -> Report:
        """Snapshot a finished session.

        Args:
            session (Session): The consolidated session.
            extracted (Mapping[Path, Sequence[ExtractedItem]]): Extraction results.
            focus_features (Sequence[str] | None): Focus features, or ``None``.
            generated_at (datetime): Report timestamp.
            extra_diagnostics (Sequence[Diagnostic]): Tool diagnostics recorded outside
                the session (e.g. config warnings); listed first.

        Returns:
            Report: The renderer input.
        """
        files: tuple[Path, ...] = tuple(session.sorted_files())
        return cls(
            mode=mode_description(focus_features),
            generated_at=generated_at,
            configurations=tuple(c.descriptor for c in session.configurations),
            diagnostics=tuple(session.sorted_diagnostics()),
            explanations=dict(sorted(session.explanations.items())),
            files=files,
            backrefs={path: tuple(session.sorted_backrefs(path)) for path in files},
            extracted={path: tuple(items) for path, items in extracted.items()},
            tool_diagnostics=(*extra_diagnostics, *session.diagnostics),
        )


def write_report(text: str, path: Path) -> None:
    """Write the rendered report to ``path``, creating or truncating it.

    Raises:
        OSError: If the file cannot be created or written.
    """
    path.write_text(text, encoding="utf-8")
    logger.info("Report written to %s (%d characters)", path, len(text))
