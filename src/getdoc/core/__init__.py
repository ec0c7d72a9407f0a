# topmark:header:start
#
#   project      : GetDoc
#   file         : __init__.py
#   file_relpath : src/getdoc/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic aggregation engine.

Modules, leaves first:
    * [`getdoc.core.paths`][getdoc.core.paths]: span path classifier.
    * [`getdoc.core.matrix`][getdoc.core.matrix]: configuration matrix builder.
    * [`getdoc.core.walker`][getdoc.core.walker]: diagnostic tree walker.
    * [`getdoc.core.probe`][getdoc.core.probe]: probe runner and build tool protocol.
    * [`getdoc.core.session`][getdoc.core.session]: cross-run consolidator and driver.
"""

from __future__ import annotations

from getdoc.core.matrix import build_matrix
from getdoc.core.model import (
    AggregatedDiagnostic,
    BuildConfiguration,
    DiagnosticIdentityKey,
    FileOriginRecord,
    PerDiagnosticRecord,
    RawDiagnosticNode,
    Span,
)
from getdoc.core.paths import ClassifiedFile, FileOrigin, PathClassifier
from getdoc.core.probe import BuildOutput, BuildTool, CargoBuildTool, ProbeError, run_probe
from getdoc.core.session import Session, run_session
from getdoc.core.walker import DiagnosticWalker, ProbeResult

__all__ = [
    "AggregatedDiagnostic",
    "BuildConfiguration",
    "BuildOutput",
    "BuildTool",
    "CargoBuildTool",
    "ClassifiedFile",
    "DiagnosticIdentityKey",
    "DiagnosticWalker",
    "FileOrigin",
    "FileOriginRecord",
    "PathClassifier",
    "PerDiagnosticRecord",
    "ProbeError",
    "ProbeResult",
    "RawDiagnosticNode",
    "Session",
    "Span",
    "build_matrix",
    "run_probe",
    "run_session",
]
