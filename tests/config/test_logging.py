# topmark:header:start
#
#   project      : GetDoc
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the GetDoc logging setup."""

from __future__ import annotations

import logging

import pytest

from getdoc.config.logging import (
    LOG_LEVEL_ENV_VAR,
    TRACE_LEVEL,
    GetdocLogger,
    get_logger,
    resolve_env_log_level,
    setup_logging,
)
from tests.conftest import parametrize


@parametrize(
    "raw, expected",
    [
        ("trace", TRACE_LEVEL),
        (" Debug ", logging.DEBUG),
        ("warn", logging.WARNING),
        ("fatal", logging.CRITICAL),
        ("15", 15),
        ("verbose", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int | None
) -> None:
    """It should map GETDOC_LOG_LEVEL names and numbers to logging levels."""
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, raw)

    assert resolve_env_log_level() == expected


def test_unset_env_log_level() -> None:
    """It should return None when GETDOC_LOG_LEVEL is not set."""
    assert resolve_env_log_level() is None


def test_get_logger_supports_trace(caplog: pytest.LogCaptureFixture) -> None:
    """It should hand out GetdocLogger instances with a working trace()."""
    caplog.set_level(TRACE_LEVEL)
    logger: GetdocLogger = get_logger("getdoc.tests.trace")

    logger.trace("walking %d node(s)", 3)

    assert isinstance(logger, GetdocLogger)
    assert any(
        r.levelno == TRACE_LEVEL and r.getMessage() == "walking 3 node(s)" for r in caplog.records
    )


def test_setup_logging_replaces_its_handler() -> None:
    """It should install a single GetDoc handler however often it is called."""
    package_logger = logging.getLogger("getdoc")
    before = list(package_logger.handlers)

    setup_logging(logging.DEBUG)
    setup_logging(None)

    added = [h for h in package_logger.handlers if h not in before]
    assert len(added) == 1
    assert added[0].level == logging.CRITICAL
    assert package_logger.level == logging.NOTSET
