# topmark:header:start
#
#   project      : GetDoc
#   file         : logging.py
#   file_relpath : src/getdoc/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Internal logging for GetDoc.

Internal logging is silent unless ``GETDOC_LOG_LEVEL`` asks for it; it is
written to stderr so that it never interleaves with the progress lines of
the console. A TRACE level below DEBUG follows single items through the
pipeline (parsed messages, extracted items).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

#: Environment variable consulted by `resolve_env_log_level`.
LOG_LEVEL_ENV_VAR: Final[str] = "GETDOC_LOG_LEVEL"

_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
}

# Lowest level first; a record takes the style of the highest threshold it reaches.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (TRACE_LEVEL, chalk.blue),
    (logging.DEBUG, chalk.gray),
    (logging.INFO, chalk.green),
    (logging.WARNING, chalk.yellow),
    (logging.ERROR, chalk.red),
    (logging.CRITICAL, chalk.red_bright),
)

_handler: logging.Handler | None = None


class GetdocLogger(logging.Logger):
    """Logger with a `trace` method for the TRACE level."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(GetdocLogger)


class ChalkFormatter(logging.Formatter):
    """Colors each formatted record according to its level."""

    def format(self, record: logging.LogRecord) -> str:
        """Return the formatted record, styled for its level."""
        message: str = super().format(record)
        style: Callable[[str], str] = chalk.dim
        for threshold, level_style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                style = level_style
        return style(message)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``GETDOC_LOG_LEVEL``, or None if unset or unknown.

    Accepts level names (case-insensitive, ``WARN`` and ``FATAL`` included)
    and plain numbers.
    """
    value: str = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if value.isdigit():
        return int(value)
    return _LEVEL_NAMES.get(value)


def setup_logging(level: int | None = None) -> None:
    """Install GetDoc's stderr handler on the ``getdoc`` logger.

    Args:
        level (int | None): Logging level; ``None`` keeps GetDoc silent
            (only CRITICAL records are shown). Levels below INFO add the
            source location to each record.
    """
    global _handler

    effective: int = logging.CRITICAL if level is None else level
    package_logger: logging.Logger = logging.getLogger("getdoc")
    package_logger.setLevel(logging.NOTSET if level is None else level)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    fmt: str = "[%(levelname)s] %(message)s"
    if effective < logging.INFO:
        fmt = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setLevel(effective)
    _handler.setFormatter(ChalkFormatter(fmt))
    package_logger.addHandler(_handler)


def get_logger(name: str) -> GetdocLogger:
    """Return the `GetdocLogger` called ``name``."""
    return cast("GetdocLogger", logging.getLogger(name))
