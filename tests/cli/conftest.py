# topmark:header:start
#
#   project      : GetDoc
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running GetDoc against a fake build tool.

`run_cli()` invokes the Click command with a `FakeBuildTool` injected through
Click's context object (``obj={"build_tool": ...}``), so no test ever runs
the real ``cargo``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from click.testing import CliRunner, Result

from getdoc.cli.exit_codes import ExitCode
from getdoc.cli.main import cli

if TYPE_CHECKING:
    from tests.fakes import FakeBuildTool


def run_cli(argv: Sequence[str], *, build_tool: FakeBuildTool | None = None) -> Result:
    """Invoke the CLI with an optional fake build tool.

    Args:
        argv (Sequence[str]): CLI argument vector, e.g. ``["--features", "x"]``.
        build_tool (FakeBuildTool | None): Build collaborator to inject; ``None``
            is only appropriate for ``--help`` / ``--version``.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.

    Example:
        ```python
        result = run_cli(["--project-root", str(project)], build_tool=FakeBuildTool())
        assert_SUCCESS(result)
        ```
    """
    runner = CliRunner()
    obj: dict[str, object] = {}
    if build_tool is not None:
        obj["build_tool"] = build_tool  # inject test override into Click's context object
    return runner.invoke(cli, list(argv), obj=obj)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_IO_ERROR(result: Result) -> None:
    """Assert that the command exited with IO_ERROR (code 74).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.IO_ERROR, result.output
