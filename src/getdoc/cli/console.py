# topmark:header:start
#
#   project      : GetDoc
#   file         : console.py
#   file_relpath : src/getdoc/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console for user-facing program output.

Progress lines (``[getdoc] Running ...``), tool warnings and the final summary
go through `ClickConsole`; internal diagnostics go through `logging`.
"""

from __future__ import annotations

import sys
from typing import TextIO

import click


class ClickConsole:
    """Writes program output with Click, independently from the logger.

    Args:
        enable_color (bool): Keep ANSI styling in the output.
        out (TextIO | None): Progress stream. Defaults to `sys.stdout`.
        err (TextIO | None): Warning and error stream. Defaults to `sys.stderr`.
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "") -> None:
        """Write a progress line to stdout."""
        click.echo(text, file=self.out, color=self.enable_color)

    def warn(self, text: str) -> None:
        """Write an (already styled) warning line to stderr."""
        click.echo(text, file=self.err, color=self.enable_color)

    def error(self, text: str) -> None:
        """Write an error line to stderr, in bright red."""
        click.secho(text, file=self.err, color=self.enable_color, fg="bright_red")
