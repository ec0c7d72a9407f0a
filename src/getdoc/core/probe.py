# topmark:header:start
#
#   project      : GetDoc
#   file         : probe.py
#   file_relpath : src/getdoc/core/probe.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run one build configuration and decode its JSON message stream.

The build tool is reached through the small `BuildTool` protocol so tests
(and alternative front-ends) can substitute a canned stream. The default
`CargoBuildTool` runs ``cargo check --message-format=json <flags>`` in the
project root and waits for it to exit; there is no timeout.

Stream handling:
    * lines that are not JSON objects are skipped silently (Cargo interleaves
      plain progress output);
    * only ``compiler-message`` objects are decoded into diagnostic trees;
    * a build tool that cannot be started, or that fails without producing a
      single structured message, raises `ProbeError`. The session turns that
      into a synthetic ``TOOL_ERROR`` record instead of aborting.
"""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from getdoc.config.logging import get_logger
from getdoc.constants import COMPILER_MESSAGE_REASON, TOOL_ERROR_LEVEL
from getdoc.core.model import MalformedMessageError, PerDiagnosticRecord, RawDiagnosticNode
from getdoc.core.walker import DiagnosticWalker, ProbeResult

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

    from getdoc.config.logging import GetdocLogger
    from getdoc.core.model import BuildConfiguration
    from getdoc.core.paths import PathClassifier

logger: GetdocLogger = get_logger(__name__)


class ProbeError(Exception):
    """Raised when a probe produced no usable output at all."""


@dataclass(frozen=True, slots=True)
class BuildOutput:
    """Captured result of one build tool invocation."""

    stdout: str
    stderr: str = ""
    returncode: int = 0


class BuildTool(Protocol):
    """Structural interface of the build collaborator."""

    def describe(self, flags: Sequence[str]) -> str:
        """Return the command line that `run` would execute, for display."""
        ...

    def run(self, flags: Sequence[str]) -> BuildOutput:
        """Run the build with ``flags`` and return its captured output.

        Raises:
            ProbeError: If the tool cannot be started.
        """
        ...


class CargoBuildTool:
    """Run ``cargo check`` with JSON diagnostics.

    Args:
        program (str): Cargo executable.
        cwd (Path): Directory to run in (the project root).
    """

    subcommand: tuple[str, ...] = ("check", "--message-format=json")

    def __init__(self, program: str, cwd: Path) -> None:
        self.program = program
        self.cwd = cwd

    def argv(self, flags: Sequence[str]) -> list[str]:
        """Return the full argument vector for ``flags``."""
        return [self.program, *self.subcommand, *flags]

    def describe(self, flags: Sequence[str]) -> str:
        """Return the command line that `run` would execute, for display."""
        return " ".join(["cargo", *self.subcommand, *flags])

    def run(self, flags: Sequence[str]) -> BuildOutput:
        """Run cargo and capture its output.

        Raises:
            ProbeError: If cargo cannot be started.
        """
        argv: list[str] = self.argv(flags)
        logger.debug("Running %s in %s", argv, self.cwd)
        try:
            completed = subprocess.run(
                argv,
                cwd=self.cwd,
                capture_output=True,
                check=False,
            )
        except OSError as exc:
            raise ProbeError(f"Could not start {self.program!r}: {exc}") from exc
        return BuildOutput(
            stdout=completed.stdout.decode("utf-8", errors="replace"),
            stderr=completed.stderr.decode("utf-8", errors="replace"),
            returncode=completed.returncode,
        )


def iter_messages(stdout: str) -> Iterator[dict[str, Any]]:
    """Yield every line of ``stdout`` that decodes as a JSON object."""
    for line in stdout.splitlines():
        stripped: str = line.strip()
        if not stripped.startswith("{"):
            continue
        try:
            message: Any = json.loads(stripped)
        except ValueError:
            logger.trace("Skipping undecodable line: %.80s", stripped)
            continue
        if isinstance(message, dict):
            yield message


def decode_diagnostic(message: dict[str, Any]) -> RawDiagnosticNode | None:
    """Return the diagnostic tree carried by a ``compiler-message`` object.

    Other message kinds, and compiler messages of an unexpected shape, yield ``None``.
    """
    if message.get("reason") != COMPILER_MESSAGE_REASON:
        return None
    payload: Any = message.get("message")
    if payload is None:
        return None
    try:
        return RawDiagnosticNode.from_json(payload)
    except MalformedMessageError as exc:
        logger.debug("Skipping malformed compiler message: %s", exc)
        return None


def run_probe(
    configuration: BuildConfiguration,
    *,
    build_tool: BuildTool,
    classifier: PathClassifier,
) -> ProbeResult:
    """Probe one configuration and walk every diagnostic it reports.

    Args:
        configuration (BuildConfiguration): The configuration to probe.
        build_tool (BuildTool): The build collaborator.
        classifier (PathClassifier): Span path classifier.

    Returns:
        ProbeResult: Records, files and backreferences of this probe.

    Raises:
        ProbeError: If the tool could not be started, or exited unsuccessfully
            without emitting any structured message.
    """
    output: BuildOutput = build_tool.run(configuration.flags)

    stderr_text: str = output.stderr.strip()
    if stderr_text and "error:" in stderr_text:
        logger.warning(
            "Cargo stderr for configuration '%s':\n%s", configuration.descriptor, stderr_text
        )

    walker = DiagnosticWalker(classifier, configuration.descriptor)
    n_messages: int = 0
    for message in iter_messages(output.stdout):
        n_messages += 1
        node: RawDiagnosticNode | None = decode_diagnostic(message)
        if node is not None:
            walker.walk(node)

    if n_messages == 0 and output.returncode != 0:
        detail: str = stderr_text or f"exit status {output.returncode}"
        raise ProbeError(f"Build produced no structured output: {detail}")

    logger.debug(
        "Configuration '%s': %d message(s), %d record(s), %d third-party file(s)",
        configuration.descriptor,
        n_messages,
        len(walker.result.records),
        len(walker.result.files),
    )
    return walker.result


def tool_error_result(configuration: BuildConfiguration, error: Exception) -> ProbeResult:
    """Return a probe result holding one synthetic ``TOOL_ERROR`` record."""
    message: str = (
        f"Error running cargo check with configuration '{configuration.descriptor}': {error}"
    )
    return ProbeResult(
        records=[
            PerDiagnosticRecord(
                level=TOOL_ERROR_LEVEL,
                code=None,
                rendered=message,
                location="",
            )
        ]
    )
