# topmark:header:start
#
#   project      : GetDoc
#   file         : test_api_run.py
#   file_relpath : tests/api/test_api_run.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the programmatic `getdoc.api.run` entry point."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from getdoc import api
from getdoc.config.types import ReportFormat
from getdoc.core.model import BuildConfiguration
from getdoc.core.probe import BuildOutput
from tests.conftest import make_config
from tests.fakes import FakeBuildTool, diagnostic, span, stream


def _dep_error_tool(dep_file: Path) -> FakeBuildTool:
    message = diagnostic(
        "error",
        "error[E0599]: no method named `frob` found",
        code="E0599",
        spans=[span("src/lib.rs", 2), span(dep_file, 7, primary=False)],
    )
    return FakeBuildTool(default=BuildOutput(stdout=stream(message), returncode=101))


def test_run_writes_the_rendered_report(project: Path, dep_file: Path) -> None:
    """It should write exactly the rendered text to the configured output path."""
    config = make_config(project, focus_features=("x",))
    probed: list[BuildConfiguration] = []
    inspected: list[Path] = []

    result = api.run(
        config,
        build_tool=_dep_error_tool(dep_file),
        on_probe=probed.append,
        on_file=inspected.append,
    )

    assert result.output_path == project / "report.md"
    assert result.output_path.read_text(encoding="utf-8") == result.text
    assert len(probed) == 3
    assert inspected == [dep_file]
    assert not result.report.is_empty
    assert "ERROR: E0599" in result.text


def test_run_renders_json_when_requested(project: Path, dep_file: Path) -> None:
    """It should honor the configured report format."""
    config = make_config(project, focus_features=(), report_format=ReportFormat.JSON)

    result = api.run(config, build_tool=_dep_error_tool(dep_file))

    payload = json.loads(result.output_path.read_text(encoding="utf-8"))
    assert payload["mode"] == "Targeted Mode (Context specified, using crate defaults)"
    assert [f["path"] for f in payload["files"]] == [str(dep_file)]


def test_run_clean_build_is_empty(project: Path, cargo_home: Path) -> None:
    """It should produce an empty report when the build is clean."""
    result = api.run(make_config(project, focus_features=()), build_tool=FakeBuildTool())

    assert result.report.is_empty
    assert result.output_path.is_file()


def test_run_propagates_write_failure(tmp_path: Path, project: Path, cargo_home: Path) -> None:
    """It should raise OSError when the report directory does not exist."""
    config = make_config(
        project, focus_features=(), output_path=tmp_path / "missing" / "report.md"
    )

    with pytest.raises(OSError):
        api.run(config, build_tool=FakeBuildTool())


def test_report_is_stamped_with_session_start(project: Path, cargo_home: Path) -> None:
    """It should use the configuration's start time as the report timestamp."""
    started = datetime(2025, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
    config = make_config(
        project, focus_features=(), report_format=ReportFormat.JSON, started_at=started
    )

    result = api.run(config, build_tool=FakeBuildTool())

    assert result.report.generated_at == started
    assert json.loads(result.text)["generated_at"] == "2025-03-04T05:06:07+00:00"
