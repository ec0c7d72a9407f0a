# topmark:header:start
#
#   project      : GetDoc
#   file         : test_diagnostic_log.py
#   file_relpath : tests/diagnostic/test_diagnostic_log.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for tool-level diagnostics."""

from __future__ import annotations

from getdoc.diagnostic.model import DiagnosticLevel, DiagnosticLog, count_by_level


def test_log_keeps_insertion_order() -> None:
    """It should record diagnostics in the order they were added."""
    log = DiagnosticLog()
    log.add_warning("manifest not found")
    log.add_error("could not start cargo")
    log.add_warning("unreadable file")

    assert [(d.level, d.message) for d in log] == [
        (DiagnosticLevel.WARNING, "manifest not found"),
        (DiagnosticLevel.ERROR, "could not start cargo"),
        (DiagnosticLevel.WARNING, "unreadable file"),
    ]
    assert len(log) == 3


def test_count_by_level() -> None:
    """It should count diagnostics per level value and report absent levels as zero."""
    log = DiagnosticLog()
    log.add_warning("a")
    log.add_warning("b")

    assert count_by_level(log) == {"warning": 2, "error": 0}
    assert count_by_level(()) == {"warning": 0, "error": 0}


def test_level_color_wraps_text() -> None:
    """It should return a callable that keeps the message text."""
    for level in DiagnosticLevel:
        assert "message" in level.color("message")
