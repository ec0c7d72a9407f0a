# topmark:header:start
#
#   project      : GetDoc
#   file         : getters.py
#   file_relpath : src/getdoc/config/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Checked value getters for TOML config tables.

These helpers validate the expected shape of a value and record **warnings**
in a `DiagnosticLog` (and also log a warning) when it does not match, so that
user mistakes in ``[package.metadata.getdoc]`` are surfaced without crashing
or changing defaulting behavior.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from getdoc.config.logging import GetdocLogger
    from getdoc.config.manifest import TomlTable
    from getdoc.diagnostic.model import DiagnosticLog


def get_string_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: GetdocLogger,
) -> str | None:
    """Return an optional string value, warning when present but not `str`."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected string in %s, got %s: %r", loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected string in {loc}, got {type(value).__name__}: {value}")
    return None


def get_string_list_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: GetdocLogger,
) -> list[str]:
    """Return a list of strings, dropping (and warning about) non-string entries.

    A value that is not a list at all is ignored with a warning; a missing key
    yields an empty list.
    """
    value: Any | None = table.get(key)
    if value is None:
        return []

    loc: Final[str] = f"{where}.{key}"
    if not isinstance(value, list):
        logger.warning("Expected array in %s, got %s: %r", loc, type(value).__name__, value)
        diagnostics.add_warning(f"Expected array in {loc}, got {type(value).__name__}: {value}")
        return []

    items: list[str] = []
    for item in value:
        if isinstance(item, str):
            items.append(item)
            continue
        logger.warning("Ignoring non-string entry in %s: %r", loc, item)
        diagnostics.add_warning(f"Ignoring non-string entry in {loc}: {item!r}")
    return items
