# topmark:header:start
#
#   project      : GetDoc
#   file         : test_display_path.py
#   file_relpath : tests/utils/test_display_path.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for path display helpers."""

from __future__ import annotations

from pathlib import Path

from getdoc.utils.file import display_path
from tests.conftest import parametrize

ROOT = Path("/work/proj")


@parametrize(
    "file_name, expected",
    [
        ("/work/proj/src/lib.rs", "src/lib.rs"),
        ("src/main.rs", "src/main.rs"),
        ("/home/u/.cargo/registry/src/x/lib.rs", "/home/u/.cargo/registry/src/x/lib.rs"),
        ("/work/project-other/lib.rs", "/work/project-other/lib.rs"),
    ],
)
def test_display_path(file_name: str, expected: str) -> None:
    """It should shorten only absolute paths below the project root."""
    assert display_path(file_name, ROOT) == expected
