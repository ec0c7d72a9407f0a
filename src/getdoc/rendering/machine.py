# topmark:header:start
#
#   project      : GetDoc
#   file         : machine.py
#   file_relpath : src/getdoc/rendering/machine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Machine-readable (JSON) rendering of a GetDoc report.

The payload carries the same data as the Markdown report, without any
presentation text:

- ``meta``: tool name and version;
- ``mode``, ``generated_at`` and the probed ``configurations``;
- ``diagnostics``: consolidated diagnostics in report order;
- ``explanations``: code → explanation;
- ``files``: third-party files with backreferences and extracted items
  (``items`` is ``null`` when extraction failed);
- ``tool_diagnostics``: per-level counts and messages.

These helpers are Click-free and do not perform any I/O.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, TypedDict

from getdoc.constants import GETDOC_VERSION
from getdoc.diagnostic.model import count_by_level

if TYPE_CHECKING:
    from pathlib import Path

    from getdoc.core.model import AggregatedDiagnostic, FileOriginRecord
    from getdoc.extract.rust import ExtractedItem
    from getdoc.rendering.report import Report


class MetaPayload(TypedDict):
    """Metadata describing the GetDoc runtime for machine output."""

    tool: str
    version: str


class ImplicatedFilePayload(TypedDict):
    """One implicated third-party file of a diagnostic."""

    path: str
    detail: str


class DiagnosticPayload(TypedDict):
    """One consolidated compiler diagnostic."""

    level: str
    code: str | None
    location: str
    rendered: str
    configurations: list[str]
    implicated_files: list[ImplicatedFilePayload]


class BackrefPayload(TypedDict):
    """One backreference from a file to a diagnostic occurrence."""

    level: str
    code: str | None
    location: str
    configuration: str


class ItemPayload(TypedDict):
    """One extracted source item."""

    kind: str
    name: str
    signature: str
    doc_lines: list[str]
    is_sub_item: bool


class FilePayload(TypedDict):
    """One implicated third-party file."""

    path: str
    referenced_by: list[BackrefPayload]
    items: list[ItemPayload] | None


class ToolDiagnosticEntry(TypedDict):
    """Machine-readable tool diagnostic entry."""

    level: str
    message: str


class ToolDiagnosticsPayload(TypedDict):
    """Tool diagnostics with counts."""

    counts: dict[str, int]
    items: list[ToolDiagnosticEntry]


class ReportPayload(TypedDict):
    """Top-level JSON document."""

    meta: MetaPayload
    mode: str
    generated_at: str
    configurations: list[str]
    diagnostics: list[DiagnosticPayload]
    explanations: dict[str, str]
    files: list[FilePayload]
    tool_diagnostics: ToolDiagnosticsPayload


def build_meta_payload() -> MetaPayload:
    """Build a small metadata payload with tool name and version."""
    return {"tool": "getdoc", "version": GETDOC_VERSION}


def build_diagnostic_payload(diag: AggregatedDiagnostic) -> DiagnosticPayload:
    """Build the payload of one consolidated diagnostic."""
    return {
        "level": diag.level,
        "code": diag.code,
        "location": diag.location,
        "rendered": diag.rendered,
        "configurations": diag.sorted_descriptors(),
        "implicated_files": [
            {"path": str(path), "detail": detail} for path, detail in diag.implicated_files
        ],
    }


def build_backref_payload(origin: FileOriginRecord) -> BackrefPayload:
    """Build the payload of one backreference."""
    return {
        "level": origin.level,
        "code": origin.code,
        "location": origin.location,
        "configuration": origin.descriptor,
    }


def build_item_payload(item: ExtractedItem) -> ItemPayload:
    """Build the payload of one extracted item."""
    return {
        "kind": item.kind.value,
        "name": item.name,
        "signature": item.signature,
        "doc_lines": list(item.doc_lines),
        "is_sub_item": item.is_sub_item,
    }


def build_file_payload(report: Report, path: Path) -> FilePayload:
    """Build the payload of one implicated file."""
    items: tuple[ExtractedItem, ...] | None = report.extracted.get(path)
    return {
        "path": str(path),
        "referenced_by": [build_backref_payload(o) for o in report.backrefs.get(path, ())],
        "items": None if items is None else [build_item_payload(i) for i in items],
    }


def build_report_payload(report: Report) -> ReportPayload:
    """Build the full JSON-friendly payload of ``report``."""
    return {
        "meta": build_meta_payload(),
        "mode": report.mode,
        "generated_at": report.generated_at.isoformat(),
        "configurations": list(report.configurations),
        "diagnostics": [build_diagnostic_payload(d) for d in report.diagnostics],
        "explanations": dict(report.explanations),
        "files": [build_file_payload(report, p) for p in report.files],
        "tool_diagnostics": {
            "counts": count_by_level(report.tool_diagnostics),
            "items": [
                {"level": d.level.value, "message": d.message} for d in report.tool_diagnostics
            ],
        },
    }


def render_json(report: Report) -> str:
    """Render ``report`` as an indented JSON document (ending with a newline)."""
    return json.dumps(build_report_payload(report), indent=2) + "\n"
