# topmark:header:start
#
#   project      : GetDoc
#   file         : cli_types.py
#   file_relpath : src/getdoc/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click parameter types for the GetDoc CLI."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

import click
from click.shell_completion import CompletionItem

if TYPE_CHECKING:
    from collections.abc import Sequence


class EnumValueParam(click.ParamType):
    """Accepts the (case-insensitive) value of a string `Enum` member.

    Used for ``--color`` and ``--format``.
    """

    def __init__(self, enum_cls: type[Enum]) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__.lower()
        self.values: Sequence[str] = [member.value for member in enum_cls]

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Enum:
        """Return the member whose value is ``value``."""
        if isinstance(value, self.enum_cls):
            return value
        try:
            return self.enum_cls(str(value).strip().lower())
        except ValueError:
            self.fail(f"'{value}' is not one of {', '.join(self.values)}.", param, ctx)

    def shell_complete(
        self, ctx: click.Context, param: click.Parameter, incomplete: str
    ) -> list[CompletionItem]:
        """Complete member values (``eval "$(_GETDOC_COMPLETE=bash_source getdoc)"``)."""
        return [CompletionItem(v) for v in self.values if v.startswith(incomplete.lower())]

    def get_metavar(self, param: click.Parameter, ctx: click.Context | None = None) -> str:
        """Return the metavar shown in help output (e.g. ``[markdown|json]``)."""
        return "[" + "|".join(self.values) + "]"
