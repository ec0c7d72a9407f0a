# topmark:header:start
#
#   project      : GetDoc
#   file         : errors.py
#   file_relpath : src/getdoc/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the GetDoc CLI.

Each exception carries its process exit code. When the Click context holds a
GetDoc console, the message is printed through it (see `GetdocError.show`).
"""

from __future__ import annotations

from typing import IO, Any

import click

from getdoc.cli.exit_codes import ExitCode


class GetdocError(click.ClickException):
    """Base class for GetDoc CLI errors."""

    exit_code = ExitCode.FAILURE

    def show(self, file: IO[Any] | None = None) -> None:
        """Print the error on the GetDoc console, or Click's way without one."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        console = ctx.obj.get("console") if ctx is not None and isinstance(ctx.obj, dict) else None
        if console is None:
            super().show(file)
            return
        console.error(self.format_message())


class GetdocUsageError(GetdocError):
    """Conflicting or invalid command-line flags."""

    exit_code = ExitCode.USAGE_ERROR


class GetdocIOError(GetdocError):
    """The report could not be written."""

    exit_code = ExitCode.IO_ERROR
