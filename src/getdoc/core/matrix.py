# topmark:header:start
#
#   project      : GetDoc
#   file         : matrix.py
#   file_relpath : src/getdoc/core/matrix.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build the ordered list of feature configurations to probe.

Targeted mode (a focus-feature list is given):
    * empty list: the crate defaults only;
    * otherwise: ``--features F``, ``--no-default-features --features F``,
      and the crate defaults as a baseline.

Comprehensive mode (no focus list):
    * the crate defaults; then, if the manifest declares feature groups,
      ``--no-default-features``, one ``--no-default-features --features G``
      per declared group except ``default``, and ``--all-features``.

Both modes drop configurations whose canonical (sorted) flag key has been
seen before, keeping the first occurrence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from getdoc.config.logging import get_logger
from getdoc.config.manifest import ManifestError, load_feature_groups
from getdoc.constants import (
    DEFAULT_FEATURE_GROUP,
    FLAG_ALL_FEATURES,
    FLAG_FEATURES,
    FLAG_NO_DEFAULT_FEATURES,
)
from getdoc.core.model import BuildConfiguration

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, Sequence
    from pathlib import Path

    from getdoc.config.logging import GetdocLogger
    from getdoc.diagnostic.model import DiagnosticLog

logger: GetdocLogger = get_logger(__name__)


def targeted_flag_sets(focus_features: Sequence[str]) -> list[tuple[str, ...]]:
    """Return the raw flag sets for targeted mode."""
    if not focus_features:
        return [()]
    joined: str = ",".join(focus_features)
    return [
        (FLAG_FEATURES, joined),
        (FLAG_NO_DEFAULT_FEATURES, FLAG_FEATURES, joined),
        (),
    ]


def comprehensive_flag_sets(feature_groups: Mapping[str, Sequence[str]]) -> list[tuple[str, ...]]:
    """Return the raw flag sets for comprehensive mode given the declared groups."""
    sets: list[tuple[str, ...]] = [()]
    if not feature_groups:
        return sets
    sets.append((FLAG_NO_DEFAULT_FEATURES,))
    for name in feature_groups:
        if name != DEFAULT_FEATURE_GROUP:
            sets.append((FLAG_NO_DEFAULT_FEATURES, FLAG_FEATURES, name))
    sets.append((FLAG_ALL_FEATURES,))
    return sets


def dedupe_configurations(flag_sets: Iterable[Sequence[str]]) -> list[BuildConfiguration]:
    """Wrap flag sets into configurations, dropping later canonical duplicates."""
    seen: set[tuple[str, ...]] = set()
    configurations: list[BuildConfiguration] = []
    for flags in flag_sets:
        configuration = BuildConfiguration(tuple(flags))
        key: tuple[str, ...] = configuration.canonical_key
        if key in seen:
            logger.debug("Skipping duplicate configuration: %s", configuration.descriptor)
            continue
        seen.add(key)
        configurations.append(configuration)
    return configurations


def build_matrix(
    *,
    focus_features: Sequence[str] | None,
    manifest_path: Path,
    diagnostics: DiagnosticLog | None = None,
    load_groups: Callable[[Path], Mapping[str, Sequence[str]]] = load_feature_groups,
) -> list[BuildConfiguration]:
    """Return the ordered, de-duplicated configurations to probe.

    Args:
        focus_features (Sequence[str] | None): Focus features; ``None`` selects
            comprehensive mode, any sequence (even empty) selects targeted mode.
        manifest_path (Path): Cargo manifest consulted in comprehensive mode.
        diagnostics (DiagnosticLog | None): Receives a warning when the manifest
            cannot be used.
        load_groups (Callable[[Path], Mapping[str, Sequence[str]]]): Manifest reader.

    Returns:
        list[BuildConfiguration]: Never empty; the first entry is always probed.
    """
    if focus_features is not None:
        logger.info("Determining feature checks for targeted mode: %r", list(focus_features))
        return dedupe_configurations(targeted_flag_sets(focus_features))

    logger.info("Determining feature checks for comprehensive mode")
    try:
        groups: Mapping[str, Sequence[str]] = load_groups(manifest_path)
    except ManifestError as exc:
        logger.warning("%s; checking default features only", exc)
        if diagnostics is not None:
            diagnostics.add_warning(f"{exc}. Only the default feature set was checked.")
        groups = {}
    return dedupe_configurations(comprehensive_flag_sets(groups))
