# topmark:header:start
#
#   project      : GetDoc
#   file         : markdown.py
#   file_relpath : src/getdoc/rendering/markdown.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Markdown rendering of a GetDoc report.

Layout:
    1. title with run mode and an RFC 2822 timestamp;
    2. consolidated compiler diagnostics, in one ``text`` fence;
    3. extracted third-party source code, one section per implicated file
       with its backreferences and items;
    4. Appendix A with the error code explanations;
    5. GetDoc's own tool diagnostics, when there are any.

An empty session renders as a short report with just the title and a
"nothing found" note.
"""

from __future__ import annotations

from email.utils import format_datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from getdoc.core.model import AggregatedDiagnostic, FileOriginRecord
    from getdoc.extract.rust import ExtractedItem
    from getdoc.rendering.report import Report

NOT_AVAILABLE: str = "N/A"

NO_DIAGNOSTICS_TEXT: str = (
    "No relevant errors or warnings reported by the compiler across checked feature "
    "configurations, or none implicated third-party files."
)
MINIMAL_TEXT: str = (
    "No errors or warnings reported by the compiler across checked feature configurations, "
    "or none implicated third-party files."
)
NO_FILES_TEXT: str = (
    "No third-party crate information extracted (either no third-party files were "
    "implicated by diagnostics, or no relevant items were found in them)."
)
NO_ITEMS_TEXT: str = (
    "_This file was referenced by diagnostics, but no source code items were extracted "
    "(possibly due to a parsing issue or no matching items)._"
)


def render_title(report: Report) -> str:
    """Return the report's H1 title line."""
    return f"# GetDoc Report - {report.mode} - {format_datetime(report.generated_at)}"


def render_diagnostic(diag: AggregatedDiagnostic, explanations: Mapping[str, str]) -> list[str]:
    """Return the fenced-text lines of one consolidated diagnostic."""
    prefix: str = diag.level.upper()
    head: str = f"{prefix}: {diag.code}: " if diag.code is not None else f"{prefix}: "
    lines: list[str] = [
        f"{head}{diag.rendered}",
        f"    (Diagnostic primary location: {diag.location or NOT_AVAILABLE})",
    ]
    if diag.code is not None and diag.code in explanations:
        lines.append(f"    (For generic explanation of {diag.code}, see Appendix A)")
    lines.append(f"    Occurred under feature set(s): {', '.join(diag.sorted_descriptors())}")
    if diag.implicated_files:
        listing: str = ", ".join(
            f"`{path.name}` (at `{detail}`)" for path, detail in diag.implicated_files
        )
        lines.append(f"    (Implicates: {listing} - see details below if extracted)")
    lines.append("")
    return lines


def render_backref(origin: FileOriginRecord) -> str:
    """Return the bullet describing one backreference."""
    level: str = origin.level.upper()
    where: str = (
        f"(originating at `{origin.location}` from configuration: `{origin.descriptor}`)"
    )
    if level in ("NOTE", "HELP"):
        return f"* {level} {where}"
    return f"* {level} {origin.code or NOT_AVAILABLE} {where}"


def render_items(items: tuple[ExtractedItem, ...]) -> list[str]:
    """Return the Markdown lines for the items of one file."""
    lines: list[str] = []
    in_impl: bool = False
    for item in items:
        if item.is_sub_item:
            heading: str = "#####" if in_impl else "#### (Sub-item without Impl context)"
            lines.append(f"{heading} {item.kind.value} `{item.name}`")
        else:
            in_impl = item.kind.is_impl_block
            lines.append(f"#### {item.kind.value} `{item.heading_name}`")
        lines.append("")
        if item.doc_lines:
            for entry in item.doc_lines:
                lines.extend(f"> {line}".rstrip() for line in (entry.splitlines() or [""]))
            lines.append("")
        lines.extend(["```rust", item.signature, "```", ""])
    return lines


def render_markdown(report: Report) -> str:
    """Render ``report`` as a Markdown document.

    Args:
        report (Report): The report snapshot.

    Returns:
        str: The document text, ending with a newline.
    """
    if report.is_empty:
        return render_minimal_markdown(report)

    explanations: dict[str, str] = dict(report.explanations)
    lines: list[str] = [
        render_title(report),
        "",
        "This report consolidates identical diagnostic messages and centralizes error code "
        "explanations in an appendix.",
        "",
        "## Consolidated Compiler Diagnostics (Errors and Warnings)",
        "",
        "```text",
    ]
    if report.diagnostics:
        for diag in report.diagnostics:
            lines.extend(render_diagnostic(diag, explanations))
    else:
        lines.append(NO_DIAGNOSTICS_TEXT)
    lines.extend(["```", "", "## Extracted Third-Party Source Code", ""])

    if not report.files:
        lines.extend([NO_FILES_TEXT, ""])
    for path in report.files:
        lines.extend(["---", f"### From File: `{path}`", ""])
        origins: tuple[FileOriginRecord, ...] = report.backrefs.get(path, ())
        if origins:
            lines.append("**Referenced by:**")
            lines.extend(render_backref(o) for o in origins)
            lines.append("")
        items: tuple[ExtractedItem, ...] = report.items_for(path)
        if items:
            lines.extend(render_items(items))
        else:
            lines.extend([NO_ITEMS_TEXT, ""])

    if explanations:
        lines.extend(["## Appendix A: Error Code Explanations", ""])
        for code, text in sorted(explanations.items()):
            lines.extend([f"### Explanation for {code}", ""])
            lines.extend(f"> {line}".rstrip() for line in text.strip().splitlines())
            lines.append("")

    lines.extend(render_tool_diagnostics(report))
    return "\n".join(lines).rstrip("\n") + "\n"


def render_tool_diagnostics(report: Report) -> list[str]:
    """Return the "Tool Diagnostics" section, or nothing when there are none."""
    if not report.tool_diagnostics:
        return []
    lines: list[str] = ["## Tool Diagnostics", ""]
    lines.extend(f"- **{d.level.value}**: {d.message}" for d in report.tool_diagnostics)
    lines.append("")
    return lines


def render_minimal_markdown(report: Report) -> str:
    """Render the short report written when nothing was found."""
    lines: list[str] = [
        render_title(report),
        "",
        "## Compiler Output (Errors and Warnings)",
        "",
        "```text",
        MINIMAL_TEXT,
        "```",
        "",
    ]
    lines.extend(render_tool_diagnostics(report))
    return "\n".join(lines).rstrip("\n") + "\n"
