# topmark:header:start
#
#   project      : GetDoc
#   file         : test_machine.py
#   file_relpath : tests/rendering/test_machine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the JSON report."""

from __future__ import annotations

import json
from typing import Any

from getdoc.constants import GETDOC_VERSION
from getdoc.rendering.machine import render_json
from tests.rendering.report_fixtures import BROKEN, DEP, empty_report, sample_report


def _payload() -> dict[str, Any]:
    text: str = render_json(sample_report())
    assert text.endswith("\n")
    return json.loads(text)


def test_meta_and_mode() -> None:
    """It should identify the tool and carry the run mode and timestamp."""
    payload = _payload()

    assert payload["meta"] == {"tool": "getdoc", "version": GETDOC_VERSION}
    assert payload["mode"] == "Targeted Mode for Features: `x`"
    assert payload["generated_at"] == "2025-01-02T03:04:05+00:00"
    assert payload["configurations"] == ["default features", "--all-features"]


def test_diagnostics_payload() -> None:
    """It should list consolidated diagnostics in report order."""
    diagnostics = _payload()["diagnostics"]

    assert [d["level"] for d in diagnostics] == ["error", "warning"]
    assert diagnostics[0] == {
        "level": "error",
        "code": "E0308",
        "location": "src/lib.rs:3",
        "rendered": "error[E0308]: mismatched types",
        "configurations": ["--all-features", "default features"],
        "implicated_files": [{"path": str(DEP), "detail": "lib.rs:5"}],
    }
    assert diagnostics[1]["code"] is None


def test_files_payload_marks_failed_extraction() -> None:
    """It should use null items for files whose extraction failed."""
    files = {f["path"]: f for f in _payload()["files"]}

    assert files[str(BROKEN)]["items"] is None
    assert [i["name"] for i in files[str(DEP)]["items"]] == ["parse", "Point", "new"]
    assert files[str(DEP)]["items"][2]["is_sub_item"] is True
    assert [r["level"] for r in files[str(DEP)]["referenced_by"]] == ["error", "note"]


def test_explanations_and_tool_diagnostics() -> None:
    """It should include the explanation map and per-level tool diagnostic counts."""
    payload = _payload()

    assert list(payload["explanations"]) == ["E0308"]
    assert payload["tool_diagnostics"]["counts"] == {"warning": 1, "error": 0}
    assert payload["tool_diagnostics"]["items"][0]["level"] == "warning"


def test_empty_report_is_still_a_document() -> None:
    """It should render an empty session as a valid JSON document."""
    payload = json.loads(render_json(empty_report()))

    assert payload["diagnostics"] == []
    assert payload["files"] == []
    assert payload["mode"] == "Comprehensive Mode"
