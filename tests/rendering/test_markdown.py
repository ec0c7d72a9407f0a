# topmark:header:start
#
#   project      : GetDoc
#   file         : test_markdown.py
#   file_relpath : tests/rendering/test_markdown.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the Markdown report."""

from __future__ import annotations

from getdoc.extract.rust import ExtractedItem, ItemKind
from getdoc.rendering.markdown import (
    MINIMAL_TEXT,
    NO_ITEMS_TEXT,
    render_items,
    render_markdown,
)
from getdoc.rendering.report import mode_description
from tests.conftest import parametrize
from tests.rendering.report_fixtures import DEP, empty_report, sample_report

TITLE_DATE = "Thu, 02 Jan 2025 03:04:05 +0000"


@parametrize(
    "focus, expected",
    [
        (None, "Comprehensive Mode"),
        ((), "Targeted Mode (Context specified, using crate defaults)"),
        (("a", "b"), "Targeted Mode for Features: `a, b`"),
    ],
)
def test_mode_description(focus: tuple[str, ...] | None, expected: str) -> None:
    """It should describe the run mode for the report title."""
    assert mode_description(focus) == expected


def test_title_line() -> None:
    """It should start with the mode and an RFC 2822 timestamp."""
    text = render_markdown(sample_report())

    assert text.splitlines()[0] == (
        f"# GetDoc Report - Targeted Mode for Features: `x` - {TITLE_DATE}"
    )
    assert text.endswith("\n")


def test_consolidated_diagnostics_block() -> None:
    """It should render each merged diagnostic once with its configurations."""
    lines = render_markdown(sample_report()).splitlines()
    start = lines.index("```text")

    assert lines[start + 1 : start + 12] == [
        "ERROR: E0308: error[E0308]: mismatched types",
        "    (Diagnostic primary location: src/lib.rs:3)",
        "    (For generic explanation of E0308, see Appendix A)",
        "    Occurred under feature set(s): --all-features, default features",
        "    (Implicates: `lib.rs` (at `lib.rs:5`) - see details below if extracted)",
        "",
        "WARNING: warning: unused variable: `x`",
        "    (Diagnostic primary location: src/lib.rs:9)",
        "    Occurred under feature set(s): default features",
        "",
        "```",
    ]


def test_file_sections_with_backrefs_and_items() -> None:
    """It should list every implicated file with backreferences and its items."""
    text = render_markdown(sample_report())

    assert "### From File: `/deps/broken/src/lib.rs`" in text
    assert text.index("/deps/broken/src/lib.rs`") < text.index(f"### From File: `{DEP}`")
    assert (
        "**Referenced by:**\n"
        "* ERROR E0308 (originating at `src/lib.rs:3` from configuration: `default features`)\n"
        f"* NOTE (originating at `{DEP}:5` from configuration: `default features`)\n"
    ) in text
    assert "#### Function `parse`\n\n> Parses a value.\n\n```rust\n" in text
    assert "##### Impl Method `new`" in text


def test_file_without_items_still_listed() -> None:
    """It should keep a file whose extraction failed, with a note instead of items."""
    text = render_markdown(sample_report())
    broken_section = text.split("### From File: `/deps/broken/src/lib.rs`")[1].split("---")[0]

    assert "* ERROR E0308" in broken_section
    assert NO_ITEMS_TEXT in broken_section


def test_appendix_and_tool_diagnostics() -> None:
    """It should append code explanations and GetDoc's own warnings."""
    text = render_markdown(sample_report())

    assert (
        "## Appendix A: Error Code Explanations\n\n"
        "### Explanation for E0308\n\n"
        "> Expected type did not match the received type.\n"
        ">\n"
        "> Second paragraph.\n"
    ) in text
    assert text.rstrip().endswith(
        "## Tool Diagnostics\n\n"
        "- **warning**: Could not process file /deps/broken/src/lib.rs: denied"
    )


def test_minimal_report_when_nothing_found() -> None:
    """It should write a short report when no diagnostics and no files were found."""
    text = render_markdown(empty_report())

    assert text == (
        f"# GetDoc Report - Comprehensive Mode - {TITLE_DATE}\n"
        "\n"
        "## Compiler Output (Errors and Warnings)\n"
        "\n"
        "```text\n"
        f"{MINIMAL_TEXT}\n"
        "```\n"
    )


def test_sub_item_without_impl_context() -> None:
    """It should flag sub-items that do not follow an impl block."""
    lines = render_items(
        (ExtractedItem(ItemKind.IMPL_METHOD, "orphan", "fn orphan();", is_sub_item=True),)
    )

    assert lines[0] == "#### (Sub-item without Impl context) Impl Method `orphan`"


def test_multiline_doc_entries_are_quoted_line_by_line() -> None:
    """It should blockquote each line of a multi-line doc entry."""
    lines = render_items(
        (ExtractedItem(ItemKind.STRUCT, "S", "pub struct S", ("first\nsecond",)),)
    )

    assert lines[:5] == ["#### Struct `S`", "", "> first", "> second", ""]
