# topmark:header:start
#
#   project      : GetDoc
#   file         : api.py
#   file_relpath : src/getdoc/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Programmatic entry point: run a full GetDoc session for a frozen `Config`.

The run is strictly sequential:

1. build the configuration matrix (manifest problems degrade it, never abort);
2. probe each configuration and consolidate the results;
3. extract items from every implicated third-party file;
4. render the report and write it.

Only step 4 can fail the run: an `OSError` while writing the report is
propagated to the caller.

This module is Click-free; the CLI supplies progress callbacks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from getdoc.config.logging import get_logger
from getdoc.config.types import ReportFormat
from getdoc.core.matrix import build_matrix
from getdoc.core.paths import PathClassifier
from getdoc.core.probe import CargoBuildTool
from getdoc.core.session import Session, run_session
from getdoc.extract.rust import inspect_files
from getdoc.rendering.machine import render_json
from getdoc.rendering.markdown import render_markdown
from getdoc.rendering.report import Report, write_report

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from getdoc.config.logging import GetdocLogger
    from getdoc.config.model import Config
    from getdoc.core.model import BuildConfiguration
    from getdoc.core.probe import BuildTool
    from getdoc.extract.rust import ExtractedItem

logger: GetdocLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of a completed run.

    Attributes:
        report (Report): The rendered report's data.
        output_path (Path): Where the report was written.
        text (str): The rendered document.
    """

    report: Report
    output_path: Path
    text: str


def render_report(report: Report, report_format: ReportFormat) -> str:
    """Render ``report`` in the requested format."""
    if report_format is ReportFormat.JSON:
        return render_json(report)
    return render_markdown(report)


def default_build_tool(config: Config) -> BuildTool:
    """Return the cargo collaborator for ``config``."""
    return CargoBuildTool(config.cargo_program, config.project_root)


def run(
    config: Config,
    *,
    build_tool: BuildTool | None = None,
    on_probe: Callable[[BuildConfiguration], None] | None = None,
    on_file: Callable[[Path], None] | None = None,
) -> RunResult:
    """Run a full session and write the report.

    Args:
        config (Config): The frozen configuration.
        build_tool (BuildTool | None): Build collaborator; defaults to cargo.
        on_probe (Callable[[BuildConfiguration], None] | None): Called before each probe.
        on_file (Callable[[Path], None] | None): Called before each file is inspected.

    Returns:
        RunResult: The report data and where it was written.

    Raises:
        OSError: If the report cannot be written.
    """
    tool: BuildTool = build_tool if build_tool is not None else default_build_tool(config)
    session = Session()

    configurations: list[BuildConfiguration] = build_matrix(
        focus_features=config.focus_features,
        manifest_path=config.manifest_path,
        diagnostics=session.diagnostics,
    )
    classifier = PathClassifier(config.project_root, config.dependency_roots)
    logger.debug("Probing %d configuration(s) with %r", len(configurations), classifier)

    run_session(
        configurations,
        build_tool=tool,
        classifier=classifier,
        session=session,
        on_probe=on_probe,
    )

    extracted: dict[Path, list[ExtractedItem]] = inspect_files(
        session.sorted_files(), diagnostics=session.diagnostics, on_file=on_file
    )

    report: Report = Report.from_session(
        session,
        extracted=extracted,
        focus_features=config.focus_features,
        generated_at=config.started_at,
        extra_diagnostics=config.diagnostics,
    )
    text: str = render_report(report, config.report_format)
    write_report(text, config.output_path)
    return RunResult(report=report, output_path=config.output_path, text=text)
