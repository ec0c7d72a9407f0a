# topmark:header:start
#
#   project      : GetDoc
#   file         : constants.py
#   file_relpath : src/getdoc/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GetDoc Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

GETDOC_VERSION: str = get_version("getdoc")

# Prefix used for program-output progress lines.
GETDOC_TAG: str = "[getdoc]"

DEFAULT_MANIFEST_NAME: str = "Cargo.toml"
DEFAULT_REPORT_NAME: str = "report.md"

# Cargo layout below CARGO_HOME that holds third-party crate sources.
CARGO_REGISTRY_SRC: tuple[str, ...] = ("registry", "src")
CARGO_GIT_CHECKOUTS: tuple[str, ...] = ("git", "checkouts")

# Cargo `--message-format=json` vocabulary.
COMPILER_MESSAGE_REASON: str = "compiler-message"
REPORTABLE_LEVELS: frozenset[str] = frozenset({"error", "warning"})

# Build flags used by the configuration matrix.
FLAG_FEATURES: str = "--features"
FLAG_NO_DEFAULT_FEATURES: str = "--no-default-features"
FLAG_ALL_FEATURES: str = "--all-features"
DEFAULT_FEATURE_GROUP: str = "default"
DEFAULT_FEATURES_DESC: str = "default features"

UNKNOWN_LOCATION: str = "Unknown diagnostic location"
NON_PRIMARY_SUFFIX: str = " (non-primary)"
TOOL_ERROR_LEVEL: str = "TOOL_ERROR"

