# topmark:header:start
#
#   project      : GetDoc
#   file         : types.py
#   file_relpath : src/getdoc/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight config types and aliases.

Exports:
    - `ArgsLike`: structural mapping type for CLI/API argument dicts.
    - `ReportFormat`: output document format.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

# Generic mapping accepted by the config layer (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]


class ReportFormat(str, Enum):
    """Format of the written report.

    Members:
      MARKDOWN: Human-oriented Markdown document (default).
      JSON: One JSON document with the same data (machine-readable).
    """

    MARKDOWN = "markdown"
    JSON = "json"

    @classmethod
    def from_name(cls, name: str | None) -> ReportFormat | None:
        """Return the member whose value matches ``name`` (case-insensitive), if any."""
        if name is None:
            return None
        for member in cls:
            if member.value == name.lower():
                return member
        return None
