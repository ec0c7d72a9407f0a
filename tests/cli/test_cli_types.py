# topmark:header:start
#
#   project      : GetDoc
#   file         : test_cli_types.py
#   file_relpath : tests/cli/test_cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the Click parameter types."""

from __future__ import annotations

import click
import pytest

from getdoc.cli.cli_types import EnumValueParam
from getdoc.cli.options import ColorMode
from getdoc.config.types import ReportFormat


def test_converts_member_values_case_insensitively() -> None:
    """It should accept member values in any case and pass members through."""
    param = EnumValueParam(ReportFormat)

    assert param.convert(" JSON ", None, None) is ReportFormat.JSON
    assert param.convert(ColorMode.NEVER, None, None) is ColorMode.NEVER


def test_rejects_unknown_values() -> None:
    """It should fail with the list of accepted values."""
    param = EnumValueParam(ColorMode)

    with pytest.raises(click.BadParameter, match="auto, always, never"):
        param.convert("sometimes", None, None)


def test_metavar_and_completion() -> None:
    """It should show and complete the member values."""
    param = EnumValueParam(ColorMode)
    command = click.Command("getdoc")
    option = click.Option(["--color"], type=param)

    assert param.get_metavar(option) == "[auto|always|never]"
    completions = param.shell_complete(click.Context(command), option, "a")
    assert [c.value for c in completions] == ["auto", "always"]
