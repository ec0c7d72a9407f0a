# topmark:header:start
#
#   project      : GetDoc
#   file         : __init__.py
#   file_relpath : src/getdoc/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tool diagnostics: GetDoc's own warnings and errors, collected per run."""

from __future__ import annotations

from getdoc.diagnostic.model import Diagnostic, DiagnosticLevel, DiagnosticLog, count_by_level

__all__ = [
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticLog",
    "count_by_level",
]
