# topmark:header:start
#
#   project      : GetDoc
#   file         : model.py
#   file_relpath : src/getdoc/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and layering.

This module defines:
    - `Config`: an immutable, runtime snapshot used by the session and renderer.
    - `MutableConfig`: a mutable builder that collects defaults, the manifest's
      ``[package.metadata.getdoc]`` table and CLI overrides, then freezes into
      `Config`.

Precedence (lowest to highest):
    1. built-in defaults and the process environment (``CARGO``, ``CARGO_HOME``);
    2. ``[package.metadata.getdoc]`` in the project manifest;
    3. CLI arguments.

Path semantics:
    - Paths declared in the manifest are normalized against the manifest's directory.
    - CLI paths are normalized against the invocation CWD.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from getdoc.config.getters import get_string_list_checked, get_string_value_or_none_checked
from getdoc.config.logging import get_logger
from getdoc.config.manifest import TOOL_SECTION, ManifestError, load_tool_settings
from getdoc.config.types import ReportFormat
from getdoc.constants import DEFAULT_MANIFEST_NAME, DEFAULT_REPORT_NAME
from getdoc.core.paths import default_dependency_roots, resolve_cargo_home
from getdoc.diagnostic.model import DiagnosticLog

if TYPE_CHECKING:
    from collections.abc import Mapping

    from getdoc.config.logging import GetdocLogger
    from getdoc.config.manifest import TomlTable
    from getdoc.config.types import ArgsLike
    from getdoc.diagnostic.model import Diagnostic

logger: GetdocLogger = get_logger(__name__)

#: Marker recorded in ``config_files`` when CLI overrides were applied.
CLI_OVERRIDE_STR: str = "<CLI overrides>"

#: Environment variable naming the cargo executable (set by cargo for subcommands).
CARGO_ENV_VAR: str = "CARGO"
DEFAULT_CARGO_PROGRAM: str = "cargo"


def split_feature_list(raw: str | None) -> tuple[str, ...] | None:
    """Parse a comma-separated focus-feature argument.

    ``None`` (argument absent) selects comprehensive mode. Any string, even an
    empty one, selects targeted mode; blank entries are dropped.

    Args:
        raw (str | None): The raw argument value.

    Returns:
        tuple[str, ...] | None: The trimmed, non-empty feature names, or ``None``.
    """
    if raw is None:
        return None
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for one GetDoc session.

    Attributes:
        started_at (datetime): Local, timezone-aware session start time; stamps the report.
        project_root (Path): Directory the build tool runs in.
        manifest_path (Path): Cargo manifest read for feature groups and settings.
        output_path (Path): Destination of the report document.
        report_format (ReportFormat): Format of the report document.
        focus_features (tuple[str, ...] | None): Focus features (targeted mode), or
            ``None`` for comprehensive mode.
        cargo_program (str): Cargo executable.
        cargo_home (Path | None): Cargo home directory, if one could be determined.
        extra_dependency_roots (tuple[Path, ...]): Additional third-party source roots.
        config_files (tuple[Path | str, ...]): Provenance of applied config layers.
        diagnostics (tuple[Diagnostic, ...]): Warnings encountered while building the config.
    """

    started_at: datetime
    project_root: Path
    manifest_path: Path
    output_path: Path
    report_format: ReportFormat
    focus_features: tuple[str, ...] | None
    cargo_program: str
    cargo_home: Path | None
    extra_dependency_roots: tuple[Path, ...]
    config_files: tuple[Path | str, ...]
    diagnostics: tuple[Diagnostic, ...]

    @property
    def is_targeted(self) -> bool:
        """Return True if a focus-feature list was supplied."""
        return self.focus_features is not None

    @property
    def dependency_roots(self) -> tuple[Path, ...]:
        """Return the Cargo source roots followed by any extra roots."""
        return default_dependency_roots(self.cargo_home) + self.extra_dependency_roots


@dataclass
class MutableConfig:
    """Mutable configuration builder.

    Attributes:
        started_at (datetime): Local, timezone-aware session start time; stamps the report.
        project_root (Path): Directory the build tool runs in.
        manifest_path (Path | None): Manifest path; defaults to ``Cargo.toml`` in the root.
        output_path (Path | None): Report path; defaults to ``report.md`` in the root.
        report_format (ReportFormat): Format of the report document.
        focus_features (tuple[str, ...] | None): Focus features, or ``None``.
        cargo_program (str): Cargo executable.
        cargo_home (Path | None): Cargo home directory.
        extra_dependency_roots (list[Path]): Additional third-party source roots.
        config_files (list[Path | str]): Provenance of applied config layers.
        diagnostics (DiagnosticLog): Warnings encountered while building the config.
    """

    started_at: datetime = field(default_factory=lambda: datetime.now().astimezone())
    project_root: Path = field(default_factory=Path.cwd)
    manifest_path: Path | None = None
    output_path: Path | None = None
    report_format: ReportFormat = ReportFormat.MARKDOWN
    focus_features: tuple[str, ...] | None = None
    cargo_program: str = DEFAULT_CARGO_PROGRAM
    cargo_home: Path | None = None
    extra_dependency_roots: list[Path] = field(default_factory=lambda: [])
    config_files: list[Path | str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`, filling in path defaults."""
        project_root: Path = self.project_root.absolute()
        manifest_path: Path = self.manifest_path or project_root / DEFAULT_MANIFEST_NAME
        output_path: Path = self.output_path or project_root / DEFAULT_REPORT_NAME

        # Keep the first occurrence of each extra root
        extra_roots: list[Path] = []
        for root in self.extra_dependency_roots:
            if root not in extra_roots:
                extra_roots.append(root)

        return Config(
            started_at=self.started_at,
            project_root=project_root,
            manifest_path=manifest_path,
            output_path=output_path,
            report_format=self.report_format,
            focus_features=self.focus_features,
            cargo_program=self.cargo_program,
            cargo_home=self.cargo_home,
            extra_dependency_roots=tuple(extra_roots),
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Layers ---------------------------
    @classmethod
    def from_defaults(
        cls,
        *,
        project_root: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> MutableConfig:
        """Return a builder holding the built-in defaults and environment settings.

        Args:
            project_root (Path | None): Project root; defaults to the current directory.
            environ (Mapping[str, str] | None): Environment to consult; defaults to
                ``os.environ``.

        Returns:
            MutableConfig: The default builder.
        """
        env: Mapping[str, str] = os.environ if environ is None else environ
        draft = cls(
            project_root=(project_root or Path.cwd()).absolute(),
            cargo_program=env.get(CARGO_ENV_VAR) or DEFAULT_CARGO_PROGRAM,
            cargo_home=resolve_cargo_home(env),
        )
        logger.debug(
            "Default config: root=%s cargo=%s cargo_home=%s",
            draft.project_root,
            draft.cargo_program,
            draft.cargo_home,
        )
        return draft

    def effective_manifest_path(self) -> Path:
        """Return the manifest path this builder currently points at."""
        return self.manifest_path or self.project_root / DEFAULT_MANIFEST_NAME

    def apply_manifest_settings(self, table: TomlTable, *, manifest_path: Path) -> MutableConfig:
        """Apply the ``[package.metadata.getdoc]`` table.

        Malformed values are reported in ``diagnostics`` and otherwise ignored.

        Args:
            table (TomlTable): The settings table (may be empty).
            manifest_path (Path): Manifest the table came from; relative paths are
                resolved against its directory.

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        if not table:
            return self

        where: str = ".".join(TOOL_SECTION)
        base: Path = manifest_path.parent
        self.config_files.append(manifest_path)

        output: str | None = get_string_value_or_none_checked(
            table, "output", where=where, diagnostics=self.diagnostics, logger=logger
        )
        if output:
            self.output_path = base / output

        fmt: str | None = get_string_value_or_none_checked(
            table, "format", where=where, diagnostics=self.diagnostics, logger=logger
        )
        if fmt is not None:
            report_format: ReportFormat | None = ReportFormat.from_name(fmt)
            if report_format is None:
                logger.warning("Unknown report format in %s.format: %r", where, fmt)
                self.diagnostics.add_warning(f"Unknown report format in {where}.format: {fmt!r}")
            else:
                self.report_format = report_format

        roots: list[str] = get_string_list_checked(
            table, "dependency-roots", where=where, diagnostics=self.diagnostics, logger=logger
        )
        self.extra_dependency_roots.extend(base / r for r in roots)

        logger.debug("Applied manifest settings from %s: %r", manifest_path, table)
        return self

    def load_manifest_settings(self) -> MutableConfig:
        """Read and apply the settings table of the current manifest, if any.

        A missing or unparsable manifest is not an error here; the matrix
        builder reports it when it needs the manifest.

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        manifest_path: Path = self.effective_manifest_path()
        try:
            table: TomlTable = load_tool_settings(manifest_path)
        except ManifestError as exc:
            logger.debug("No manifest settings: %s", exc)
            return self
        return self.apply_manifest_settings(table, manifest_path=manifest_path)

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply CLI (or API) overrides.

        Recognized keys: ``features`` (raw comma-separated string or ``None``),
        ``project_root``, ``manifest_path``, ``output``, ``format`` and
        ``dependency_roots``. Keys that are absent or ``None`` leave the current
        value untouched, except ``features`` whose presence alone selects
        targeted mode.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        if args.get("project_root") is not None:
            self.project_root = Path(args["project_root"]).absolute()
        if args.get("manifest_path") is not None:
            self.manifest_path = Path(args["manifest_path"]).absolute()
        if args.get("output") is not None:
            self.output_path = Path(args["output"]).absolute()
        if args.get("format") is not None:
            self.report_format = ReportFormat(args["format"])
        if args.get("dependency_roots"):
            self.extra_dependency_roots.extend(Path(r).absolute() for r in args["dependency_roots"])
        if "features" in args:
            self.focus_features = split_feature_list(args["features"])
        return self

    @classmethod
    def load_merged(
        cls,
        args: ArgsLike,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> MutableConfig:
        """Build the layered configuration for one invocation.

        The project root and manifest location are taken from ``args`` first so
        the right manifest is consulted; CLI values are then re-applied on top
        of the manifest layer.

        Args:
            args (ArgsLike): Parsed arguments mapping.
            environ (Mapping[str, str] | None): Environment to consult.

        Returns:
            MutableConfig: The merged builder, ready to `freeze`.
        """
        root_arg: str | Path | None = args.get("project_root")
        draft: MutableConfig = cls.from_defaults(
            project_root=Path(root_arg) if root_arg is not None else None,
            environ=environ,
        )
        if args.get("manifest_path") is not None:
            draft.manifest_path = Path(args["manifest_path"]).absolute()
        draft.load_manifest_settings()
        return draft.apply_cli_args(args)
