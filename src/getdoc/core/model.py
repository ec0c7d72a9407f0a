# topmark:header:start
#
#   project      : GetDoc
#   file         : model.py
#   file_relpath : src/getdoc/core/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Data model of the diagnostic aggregation engine.

Sections:
    * BuildConfiguration: one set of build flags to probe.
    * Span / DiagnosticCode / RawDiagnosticNode: the compiler's recursive
      diagnostic tree as decoded from one ``compiler-message`` line.
    * PerDiagnosticRecord: a reportable diagnostic flattened out of a tree.
    * FileOriginRecord: a backreference from a dependency file to the
      diagnostic (and configuration) that named it.
    * DiagnosticIdentityKey / AggregatedDiagnostic: cross-configuration
      consolidation.

All records that take part in set membership or dictionary keys are frozen
dataclasses, so equality is structural over their fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from getdoc.constants import DEFAULT_FEATURES_DESC

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

#: One implicated dependency file: (canonical path, "file_name:line").
ImplicatedFile = tuple["Path", str]


class MalformedMessageError(ValueError):
    """Raised when a decoded JSON message does not have the diagnostic shape."""


@dataclass(frozen=True, slots=True)
class BuildConfiguration:
    """An immutable set of build flags plus its human-readable descriptor.

    Attributes:
        flags (tuple[str, ...]): Flag tokens passed to the build tool, in order.
    """

    flags: tuple[str, ...] = ()

    @property
    def descriptor(self) -> str:
        """Return the display name: ``"default features"`` or the space-joined flags."""
        if not self.flags:
            return DEFAULT_FEATURES_DESC
        return " ".join(self.flags)

    @property
    def canonical_key(self) -> tuple[str, ...]:
        """Return the order-insensitive identity of this configuration."""
        return tuple(sorted(self.flags))


@dataclass(frozen=True, slots=True)
class Span:
    """A source location referenced by a diagnostic node."""

    file_name: str
    is_primary: bool
    line_start: int

    @classmethod
    def from_json(cls, data: Any) -> Span:
        """Build a span from one element of a diagnostic's ``spans`` array.

        Raises:
            MalformedMessageError: If required keys are missing or mistyped.
        """
        if not isinstance(data, dict):
            raise MalformedMessageError(f"span is not an object: {data!r}")
        file_name = data.get("file_name")
        is_primary = data.get("is_primary")
        line_start = data.get("line_start")
        if not isinstance(file_name, str) or not isinstance(is_primary, bool):
            raise MalformedMessageError(f"span lacks file_name/is_primary: {data!r}")
        if not isinstance(line_start, int) or isinstance(line_start, bool):
            raise MalformedMessageError(f"span lacks line_start: {data!r}")
        return cls(file_name=file_name, is_primary=is_primary, line_start=line_start)

    def location(self) -> str:
        """Return ``"file_name:line"`` for this span."""
        return f"{self.file_name}:{self.line_start}"


@dataclass(frozen=True, slots=True)
class DiagnosticCode:
    """A compiler error code with its optional long-form explanation."""

    code: str
    explanation: str | None = None


@dataclass(frozen=True, slots=True)
class RawDiagnosticNode:
    """One node of the compiler's recursive diagnostic tree.

    Children have the same shape as their parent; there is no depth limit.
    """

    level: str
    code: DiagnosticCode | None = None
    spans: tuple[Span, ...] = ()
    children: tuple[RawDiagnosticNode, ...] = ()
    rendered: str | None = None

    @property
    def code_id(self) -> str | None:
        """Return the bare code string, if any."""
        return self.code.code if self.code is not None else None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> RawDiagnosticNode:
        """Decode the ``message`` object of a ``compiler-message`` line.

        ``level``, ``spans`` and ``children`` are required; ``code`` and
        ``rendered`` may be absent or ``null``.

        Raises:
            MalformedMessageError: If the object does not have the expected shape.
        """
        if not isinstance(data, dict):
            raise MalformedMessageError(f"diagnostic is not an object: {data!r}")
        level = data.get("level")
        spans = data.get("spans")
        children = data.get("children")
        if not isinstance(level, str):
            raise MalformedMessageError("diagnostic lacks a string 'level'")
        if not isinstance(spans, list) or not isinstance(children, list):
            raise MalformedMessageError("diagnostic lacks 'spans'/'children' arrays")

        code: DiagnosticCode | None = None
        raw_code = data.get("code")
        if isinstance(raw_code, dict) and isinstance(raw_code.get("code"), str):
            explanation = raw_code.get("explanation")
            code = DiagnosticCode(
                code=raw_code["code"],
                explanation=explanation if isinstance(explanation, str) else None,
            )
        elif raw_code is not None:
            raise MalformedMessageError(f"diagnostic has a malformed 'code': {raw_code!r}")

        rendered = data.get("rendered")
        if rendered is not None and not isinstance(rendered, str):
            raise MalformedMessageError("diagnostic 'rendered' is not a string")

        return cls(
            level=level,
            code=code,
            spans=tuple(Span.from_json(s) for s in spans),
            children=tuple(cls.from_json(c) for c in children),
            rendered=rendered,
        )


@dataclass(frozen=True, slots=True)
class FileOriginRecord:
    """Backreference from a dependency file to one diagnostic occurrence.

    Field order is the sort order used when listing backreferences.
    """

    level: str
    code: str | None
    location: str
    descriptor: str

    def sort_key(self) -> tuple[str, bool, str, str, str]:
        """Return a total ordering key (``None`` codes sort first)."""
        return (self.level, self.code is not None, self.code or "", self.location, self.descriptor)


@dataclass(frozen=True, slots=True)
class DiagnosticIdentityKey:
    """Structural identity of a logical diagnostic across configurations."""

    level: str
    code: str | None
    location: str
    rendered: str
    implicated_files: tuple[ImplicatedFile, ...]


@dataclass(frozen=True, slots=True)
class PerDiagnosticRecord:
    """A reportable diagnostic produced by one probe.

    Attributes:
        implicated_files (tuple[ImplicatedFile, ...]): De-duplicated and sorted by
            ``(path, detail)``.
    """

    level: str
    code: str | None
    rendered: str
    location: str
    implicated_files: tuple[ImplicatedFile, ...] = ()
    explanation: str | None = None

    def identity_key(self) -> DiagnosticIdentityKey:
        """Return the key under which occurrences of this diagnostic merge."""
        return DiagnosticIdentityKey(
            level=self.level,
            code=self.code,
            location=self.location,
            rendered=self.rendered,
            implicated_files=self.implicated_files,
        )


@dataclass
class AggregatedDiagnostic:
    """One logical diagnostic merged across all configurations that produced it.

    Identity fields and implicated files are fixed by the first occurrence;
    ``descriptors`` only ever grows.
    """

    level: str
    code: str | None
    rendered: str
    location: str
    implicated_files: tuple[ImplicatedFile, ...]
    descriptors: set[str] = field(default_factory=lambda: set())

    @classmethod
    def first_seen(cls, record: PerDiagnosticRecord, descriptor: str) -> AggregatedDiagnostic:
        """Create an aggregate from its first occurrence."""
        return cls(
            level=record.level,
            code=record.code,
            rendered=record.rendered,
            location=record.location,
            implicated_files=record.implicated_files,
            descriptors={descriptor},
        )

    def sort_key(self) -> tuple[str, bool, str, str]:
        """Return the presentation order key: location, code (absent first), text."""
        return (self.location, self.code is not None, self.code or "", self.rendered)

    def sorted_descriptors(self) -> list[str]:
        """Return configuration descriptors in a stable order."""
        return sorted(self.descriptors)
