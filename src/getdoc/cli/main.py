# topmark:header:start
#
#   project      : GetDoc
#   file         : main.py
#   file_relpath : src/getdoc/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GetDoc command-line entry point.

A single command: without ``--features`` it runs in comprehensive mode over
the manifest's feature groups; with ``--features`` (even an empty value) it
runs in targeted mode. The command exits with 0 whenever a report was
written, whatever the compiler reported.

Shared state lives on ``ctx.obj``:
    * ``console``: the program-output console;
    * ``verbosity_level``: program-output verbosity (a logging level);
    * ``log_level``: internal logging level from ``GETDOC_LOG_LEVEL``;
    * ``color_enabled``: resolved color mode;
    * ``build_tool`` (optional, injected by tests): replaces cargo.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from getdoc import api
from getdoc.cli.console import ClickConsole
from getdoc.cli.errors import GetdocIOError
from getdoc.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_project_options,
    common_report_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from getdoc.config.logging import get_logger, resolve_env_log_level, setup_logging
from getdoc.config.model import MutableConfig
from getdoc.constants import GETDOC_TAG, GETDOC_VERSION

if TYPE_CHECKING:
    from pathlib import Path

    from getdoc.api import RunResult
    from getdoc.config.logging import GetdocLogger
    from getdoc.config.model import Config
    from getdoc.config.types import ReportFormat
    from getdoc.core.model import BuildConfiguration
    from getdoc.core.probe import BuildTool
    from getdoc.diagnostic.model import Diagnostic

logger: GetdocLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode: ColorMode = (
        ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    )
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    if "console" not in ctx.obj:
        ctx.obj["console"] = ClickConsole(enable_color=enable_color)


def render_tool_diagnostic(diagnostic: Diagnostic, *, color: bool) -> str:
    """Return the console line for one tool diagnostic."""
    text: str = f"{GETDOC_TAG} {diagnostic.level.value.capitalize()}: {diagnostic.message}"
    return diagnostic.level.color(text) if color else text


def print_config_summary(console: ClickConsole, config: Config) -> None:
    """Print the effective settings (shown with ``-v``)."""
    console.print(f"{GETDOC_TAG} Project root: {config.project_root}")
    console.print(f"{GETDOC_TAG} Manifest: {config.manifest_path}")
    console.print(f"{GETDOC_TAG} Report: {config.output_path} ({config.report_format.value})")
    for root in config.dependency_roots:
        console.print(f"{GETDOC_TAG} Dependency root: {root}")


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help=(
        "Check a Cargo project under several feature configurations and write one "
        "consolidated report of the compiler diagnostics that implicate third-party "
        "crate sources."
    ),
)
@click.option(
    "--features",
    "features",
    default=None,
    metavar="LIST",
    help=(
        "Comma-separated focus features (targeted mode). "
        "Omit to check all declared feature groups (comprehensive mode)."
    ),
)
@common_project_options
@common_report_options
@common_verbose_options
@common_color_options
@click.version_option(GETDOC_VERSION, "--version", prog_name="getdoc")
@click.pass_context
def cli(
    ctx: click.Context,
    features: str | None,
    project_root: Path | None,
    manifest_path: Path | None,
    dependency_roots: tuple[Path, ...],
    output: Path | None,
    report_format: ReportFormat | None,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the GetDoc CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ClickConsole = ctx.obj["console"]
    verbosity_level: int = ctx.obj["verbosity_level"]
    show_progress: bool = verbosity_level < logging.ERROR

    config: Config = MutableConfig.load_merged(
        {
            "features": features,
            "project_root": project_root,
            "manifest_path": manifest_path,
            "output": output,
            "format": report_format,
            "dependency_roots": dependency_roots,
        }
    ).freeze()

    if show_progress:
        mode: str = (
            "Targeted Mode for specified features"
            if config.is_targeted
            else "Comprehensive Mode for multiple feature sets"
        )
        console.print(f"{GETDOC_TAG} Starting analysis in {mode}...")
    if verbosity_level <= logging.INFO:
        print_config_summary(console, config)

    injected: BuildTool | None = ctx.obj.get("build_tool")
    build_tool: BuildTool = injected if injected is not None else api.default_build_tool(config)

    def on_probe(configuration: BuildConfiguration) -> None:
        if show_progress:
            console.print(f"{GETDOC_TAG} Running `{build_tool.describe(configuration.flags)}`...")

    def on_file(path: Path) -> None:
        if show_progress:
            console.print(f"{GETDOC_TAG} Inspecting: {path}")

    try:
        result: RunResult = api.run(
            config, build_tool=build_tool, on_probe=on_probe, on_file=on_file
        )
    except OSError as exc:
        raise GetdocIOError(f"Could not write report to {config.output_path}: {exc}") from exc

    color: bool = bool(ctx.obj.get("color_enabled"))
    for diagnostic in result.report.tool_diagnostics:
        console.warn(render_tool_diagnostic(diagnostic, color=color))

    if not show_progress:
        return
    if result.report.is_empty:
        console.print(
            f"{GETDOC_TAG} No relevant compiler messages found or no third-party files "
            "implicated across all feature checks."
        )
        console.print(f"{GETDOC_TAG} Minimal report generated: {result.output_path}")
    else:
        console.print(f"{GETDOC_TAG} Analysis complete. Report generated: {result.output_path}")


if __name__ == "__main__":
    cli()
