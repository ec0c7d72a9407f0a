# topmark:header:start
#
#   project      : GetDoc
#   file         : fakes.py
#   file_relpath : tests/fakes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Test doubles and builders for Cargo's JSON message stream.

`FakeBuildTool` stands in for `cargo check`: it returns canned output per
flag set and records every invocation. The ``span``/``diagnostic``/
``compiler_message`` builders produce the JSON shapes Cargo emits.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from getdoc.core.probe import BuildOutput, ProbeError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from pathlib import Path


def span(file_name: str | Path, line: int, *, primary: bool = True) -> dict[str, Any]:
    """Return one element of a diagnostic's ``spans`` array."""
    return {"file_name": str(file_name), "is_primary": primary, "line_start": line}


def diagnostic(
    level: str,
    rendered: str | None,
    *,
    code: str | None = None,
    explanation: str | None = None,
    spans: Sequence[dict[str, Any]] = (),
    children: Sequence[dict[str, Any]] = (),
) -> dict[str, Any]:
    """Return the ``message`` object of a ``compiler-message`` line."""
    return {
        "level": level,
        "code": None if code is None else {"code": code, "explanation": explanation},
        "spans": list(spans),
        "children": list(children),
        "rendered": rendered,
    }


def compiler_message(message: dict[str, Any]) -> str:
    """Return one ``compiler-message`` stream line."""
    return json.dumps({"reason": "compiler-message", "message": message})


def stream(*messages: dict[str, Any], noise: bool = True) -> str:
    """Return a stdout stream holding ``messages``, with Cargo's usual surrounding lines."""
    lines: list[str] = []
    if noise:
        lines.append("   Compiling demo v0.1.0 (/tmp/demo)")
        lines.append(json.dumps({"reason": "compiler-artifact", "target": {"name": "dep"}}))
    lines.extend(compiler_message(m) for m in messages)
    if noise:
        lines.append(json.dumps({"reason": "build-finished", "success": False}))
    return "\n".join(lines) + "\n"


class FakeBuildTool:
    """Canned `BuildTool` implementation.

    Args:
        outputs (Mapping[tuple[str, ...], BuildOutput] | None): Output per flag tuple.
        default (BuildOutput | None): Output for flag tuples not in ``outputs``.
        failing (Iterable[tuple[str, ...]]): Flag tuples for which `run` raises `ProbeError`.
    """

    def __init__(
        self,
        outputs: Mapping[tuple[str, ...], BuildOutput] | None = None,
        *,
        default: BuildOutput | None = None,
        failing: Iterable[tuple[str, ...]] = (),
    ) -> None:
        self.outputs = dict(outputs or {})
        self.default = default if default is not None else BuildOutput(stdout="")
        self.failing = set(failing)
        self.calls: list[tuple[str, ...]] = []

    def describe(self, flags: Sequence[str]) -> str:
        return " ".join(["cargo", "check", "--message-format=json", *flags])

    def run(self, flags: Sequence[str]) -> BuildOutput:
        key: tuple[str, ...] = tuple(flags)
        self.calls.append(key)
        if key in self.failing:
            raise ProbeError("Could not start 'cargo': [Errno 2] No such file or directory")
        return self.outputs.get(key, self.default)
