# topmark:header:start
#
#   project      : GetDoc
#   file         : session.py
#   file_relpath : src/getdoc/core/session.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cross-run consolidation and the sequential probe driver.

`Session` owns every accumulator that outlives a single probe:

- the consolidated diagnostics, keyed by `DiagnosticIdentityKey`;
- the code → explanation map (first non-empty explanation per code wins);
- the global set of implicated third-party files;
- the per-file backreference index.

Probes never touch these directly. Each probe returns an independent
`ProbeResult`, and `Session.absorb` folds it in between probes, in
configuration order. Nothing is ever removed from the session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from getdoc.config.logging import get_logger
from getdoc.core.model import AggregatedDiagnostic
from getdoc.core.probe import ProbeError, run_probe, tool_error_result
from getdoc.diagnostic.model import DiagnosticLog

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from getdoc.config.logging import GetdocLogger
    from getdoc.core.model import (
        BuildConfiguration,
        DiagnosticIdentityKey,
        FileOriginRecord,
        PerDiagnosticRecord,
    )
    from getdoc.core.paths import PathClassifier
    from getdoc.core.probe import BuildTool
    from getdoc.core.walker import ProbeResult

logger: GetdocLogger = get_logger(__name__)


@dataclass
class Session:
    """Mutable session state accumulated across all probes.

    Attributes:
        consolidated (dict[DiagnosticIdentityKey, AggregatedDiagnostic]): Merged diagnostics.
        explanations (dict[str, str]): First non-empty explanation seen per code.
        files (set[Path]): Every third-party file implicated by any probe.
        backrefs (dict[Path, set[FileOriginRecord]]): Per-file backreferences.
        configurations (list[BuildConfiguration]): Configurations probed so far, in order.
        diagnostics (DiagnosticLog): Tool-level warnings raised during the session.
    """

    consolidated: dict[DiagnosticIdentityKey, AggregatedDiagnostic] = field(
        default_factory=lambda: {}
    )
    explanations: dict[str, str] = field(default_factory=lambda: {})
    files: set[Path] = field(default_factory=lambda: set())
    backrefs: dict[Path, set[FileOriginRecord]] = field(default_factory=lambda: {})
    configurations: list[BuildConfiguration] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    def add_record(self, record: PerDiagnosticRecord, descriptor: str) -> AggregatedDiagnostic:
        """Merge one diagnostic occurrence observed under ``descriptor``.

        Returns:
            AggregatedDiagnostic: The (possibly pre-existing) aggregate for the record.
        """
        if record.code is not None and record.explanation and record.explanation.strip():
            self.explanations.setdefault(record.code, record.explanation)

        key: DiagnosticIdentityKey = record.identity_key()
        aggregate: AggregatedDiagnostic | None = self.consolidated.get(key)
        if aggregate is None:
            aggregate = AggregatedDiagnostic.first_seen(record, descriptor)
            self.consolidated[key] = aggregate
        else:
            aggregate.descriptors.add(descriptor)
        return aggregate

    def absorb(self, configuration: BuildConfiguration, result: ProbeResult) -> None:
        """Fold one probe's result into the session."""
        self.configurations.append(configuration)
        descriptor: str = configuration.descriptor
        for record in result.records:
            self.add_record(record, descriptor)
        self.files.update(result.files)
        for path, origins in result.backrefs.items():
            self.backrefs.setdefault(path, set()).update(origins)

    def sorted_diagnostics(self) -> list[AggregatedDiagnostic]:
        """Return aggregates ordered by (location, code, rendered text)."""
        return sorted(self.consolidated.values(), key=lambda a: a.sort_key())

    def sorted_files(self) -> list[Path]:
        """Return all implicated third-party files in path order."""
        return sorted(self.files)

    def sorted_backrefs(self, path: Path) -> list[FileOriginRecord]:
        """Return the backreferences of ``path`` in a stable order."""
        return sorted(self.backrefs.get(path, ()), key=lambda o: o.sort_key())

    @property
    def is_empty(self) -> bool:
        """Return True if no diagnostic and no third-party file was found."""
        return not self.consolidated and not self.files


def run_session(
    configurations: Sequence[BuildConfiguration],
    *,
    build_tool: BuildTool,
    classifier: PathClassifier,
    session: Session | None = None,
    on_probe: Callable[[BuildConfiguration], None] | None = None,
) -> Session:
    """Probe every configuration in order and consolidate the results.

    A configuration whose probe fails contributes one synthetic ``TOOL_ERROR``
    diagnostic; the remaining configurations still run.

    Args:
        configurations (Sequence[BuildConfiguration]): Output of the matrix builder.
        build_tool (BuildTool): The build collaborator.
        classifier (PathClassifier): Span path classifier.
        session (Session | None): Existing session to extend (e.g. one that already
            carries matrix warnings); a new one is created if omitted.
        on_probe (Callable[[BuildConfiguration], None] | None): Called before each probe,
            used by the CLI for progress output.

    Returns:
        Session: The session holding all consolidated state.
    """
    session = session if session is not None else Session()
    for configuration in configurations:
        if on_probe is not None:
            on_probe(configuration)
        try:
            result: ProbeResult = run_probe(
                configuration, build_tool=build_tool, classifier=classifier
            )
        except ProbeError as exc:
            logger.error("Probe for '%s' failed: %s", configuration.descriptor, exc)
            session.diagnostics.add_error(
                f"Configuration '{configuration.descriptor}' could not be checked: {exc}"
            )
            result = tool_error_result(configuration, exc)
        session.absorb(configuration, result)

    logger.info(
        "Session complete: %d configuration(s), %d diagnostic(s), %d third-party file(s)",
        len(session.configurations),
        len(session.consolidated),
        len(session.files),
    )
    return session
