# topmark:header:start
#
#   project      : GetDoc
#   file         : manifest.py
#   file_relpath : src/getdoc/config/manifest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read a Cargo manifest (``Cargo.toml``).

Two things are taken from the manifest:

- the ``[features]`` table, which drives the comprehensive configuration
  matrix, and
- the optional ``[package.metadata.getdoc]`` table, which is GetDoc's own
  configuration layer.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
Failures surface as `ManifestError`; callers decide whether that is fatal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from getdoc.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from getdoc.config.logging import GetdocLogger

logger: GetdocLogger = get_logger(__name__)

TomlTable = dict[str, Any]

#: Section path of GetDoc's settings inside the manifest.
TOOL_SECTION: tuple[str, ...] = ("package", "metadata", "getdoc")


class ManifestError(Exception):
    """Raised when the manifest is missing, unreadable, or malformed."""


def load_manifest_dict(path: Path) -> TomlTable:
    """Load and parse a Cargo manifest.

    Args:
        path: Path to ``Cargo.toml``.

    Returns:
        The parsed TOML content as plain Python values.

    Raises:
        ManifestError: If the file does not exist, cannot be read, or is not valid TOML.
    """
    if not path.is_file():
        raise ManifestError(f"Cargo manifest not found at {path}")
    try:
        text: str = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Could not read Cargo manifest at {path}: {exc}") from exc
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise ManifestError(f"Failed to parse Cargo manifest at {path}: {exc}") from exc
    data: Any = doc.unwrap()
    logger.trace("Loaded manifest %s: %r", path, data)
    return data if isinstance(data, dict) else {}


def feature_groups_from_dict(data: TomlTable) -> dict[str, list[str]]:
    """Return the ``[features]`` table in declaration order.

    Raises:
        ManifestError: If ``features`` is present but not a table of string arrays.
    """
    features: Any = data.get("features")
    if features is None:
        return {}
    if not isinstance(features, dict):
        raise ManifestError(f"[features] must be a table, got {type(features).__name__}")
    groups: dict[str, list[str]] = {}
    for name, members in features.items():
        if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
            raise ManifestError(f"feature '{name}' must be an array of strings")
        groups[str(name)] = list(members)
    return groups


def load_feature_groups(path: Path) -> dict[str, list[str]]:
    """Return the declared feature groups of the manifest at ``path``.

    Raises:
        ManifestError: See `load_manifest_dict` and `feature_groups_from_dict`.
    """
    return feature_groups_from_dict(load_manifest_dict(path))


def tool_settings_from_dict(data: TomlTable) -> TomlTable:
    """Return the ``[package.metadata.getdoc]`` table, or ``{}`` when absent."""
    table: Any = data
    for key in TOOL_SECTION:
        if not isinstance(table, dict):
            return {}
        table = table.get(key)
    return table if isinstance(table, dict) else {}


def load_tool_settings(path: Path) -> TomlTable:
    """Return GetDoc's settings table from the manifest at ``path``.

    Raises:
        ManifestError: See `load_manifest_dict`.
    """
    return tool_settings_from_dict(load_manifest_dict(path))
