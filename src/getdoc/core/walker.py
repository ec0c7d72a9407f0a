# topmark:header:start
#
#   project      : GetDoc
#   file         : walker.py
#   file_relpath : src/getdoc/core/walker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Flatten one compiler diagnostic tree into per-probe records.

For every node of the tree (the root and all nested notes/help children):

1. compute the node's own primary location;
2. classify every span and record each third-party file, both on the node's
   implicated-file list and in the probe's file set and backreference index;
3. emit a `PerDiagnosticRecord` when the node is an error or warning with a
   non-blank rendered message;
4. recurse into the children with the same configuration descriptor.

Children are always visited, even under nodes that produce no record, because
notes frequently point into dependency code on their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from getdoc.config.logging import get_logger
from getdoc.constants import NON_PRIMARY_SUFFIX, REPORTABLE_LEVELS, UNKNOWN_LOCATION
from getdoc.core.model import FileOriginRecord, PerDiagnosticRecord
from getdoc.utils.file import display_path

if TYPE_CHECKING:
    from pathlib import Path

    from getdoc.config.logging import GetdocLogger
    from getdoc.core.model import ImplicatedFile, RawDiagnosticNode
    from getdoc.core.paths import ClassifiedFile, PathClassifier

logger: GetdocLogger = get_logger(__name__)


@dataclass
class ProbeResult:
    """Everything one probe contributes to the session.

    Attributes:
        records (list[PerDiagnosticRecord]): Reportable diagnostics, in stream order.
        files (set[Path]): Third-party files referenced by any node.
        backrefs (dict[Path, set[FileOriginRecord]]): Per-file backreferences.
    """

    records: list[PerDiagnosticRecord] = field(default_factory=lambda: [])
    files: set[Path] = field(default_factory=lambda: set())
    backrefs: dict[Path, set[FileOriginRecord]] = field(default_factory=lambda: {})

    def add_backref(self, path: Path, origin: FileOriginRecord) -> None:
        """Record that ``origin`` implicated ``path``."""
        self.files.add(path)
        self.backrefs.setdefault(path, set()).add(origin)


def primary_location(node: RawDiagnosticNode, project_root: Path) -> str:
    """Return the node's own primary location string.

    The first primary span wins; later primary spans never overwrite it.
    Without a primary span the first span is used and marked non-primary.
    """
    for span in node.spans:
        if span.is_primary:
            return f"{display_path(span.file_name, project_root)}:{span.line_start}"
    if node.spans:
        first = node.spans[0]
        shown: str = display_path(first.file_name, project_root)
        return f"{shown}:{first.line_start}{NON_PRIMARY_SUFFIX}"
    return UNKNOWN_LOCATION


class DiagnosticWalker:
    """Walk diagnostic trees for one probe, accumulating into a `ProbeResult`.

    Args:
        classifier (PathClassifier): Classifies each span path.
        descriptor (str): Descriptor of the configuration being probed.
        result (ProbeResult | None): Accumulator; a fresh one is created if omitted.
    """

    def __init__(
        self,
        classifier: PathClassifier,
        descriptor: str,
        result: ProbeResult | None = None,
    ) -> None:
        self.classifier = classifier
        self.descriptor = descriptor
        self.result = result if result is not None else ProbeResult()

    def walk(self, node: RawDiagnosticNode) -> None:
        """Visit ``node`` and, recursively, all of its children."""
        location: str = primary_location(node, self.classifier.project_root)
        implicated: list[ImplicatedFile] = []
        origin = FileOriginRecord(
            level=node.level,
            code=node.code_id,
            location=location,
            descriptor=self.descriptor,
        )

        for span in node.spans:
            classified: ClassifiedFile = self.classifier.classify(span.file_name)
            if not classified.is_third_party or classified.path is None:
                continue
            entry: ImplicatedFile = (classified.path, f"{classified.path.name}:{span.line_start}")
            if entry not in implicated:
                implicated.append(entry)
            self.result.add_backref(classified.path, origin)

        implicated.sort()

        rendered: str = (node.rendered or "").rstrip()
        if node.level in REPORTABLE_LEVELS and rendered.strip():
            self.result.records.append(
                PerDiagnosticRecord(
                    level=node.level,
                    code=node.code_id,
                    rendered=rendered,
                    location=location,
                    implicated_files=tuple(implicated),
                    explanation=node.code.explanation if node.code is not None else None,
                )
            )
            logger.trace("Recorded %s at %s (%s)", node.level, location, self.descriptor)
        elif implicated:
            logger.trace(
                "Non-reportable %s at %s implicates %d file(s)",
                node.level,
                location,
                len(implicated),
            )

        for child in node.children:
            self.walk(child)
