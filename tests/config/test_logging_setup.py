# topmark:header:start
#
#   project      : FormatStreams
#   file         : test_logging_setup.py
#   file_relpath : tests/config/test_logging_setup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the logging helpers."""

from __future__ import annotations

import logging as std_logging

import pytest

from formatstreams.config import logging
from tests.conftest import parametrize


@parametrize(
    "value, expected",
    [
        ("TRACE", logging.TRACE_LEVEL),
        ("debug", std_logging.DEBUG),
        (" warn ", std_logging.WARNING),
        ("15", 15),
        ("bogus", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: int | None
) -> None:
    """Level names and numbers are read from the environment."""
    monkeypatch.setenv(logging.LOG_LEVEL_ENV_VAR, value)
    assert logging.resolve_env_log_level() == expected


def test_unset_env_log_level() -> None:
    """Without the variable no level is forced."""
    assert logging.resolve_env_log_level() is None


def test_trace_records(caplog: pytest.LogCaptureFixture) -> None:
    """Project loggers expose `trace` below DEBUG."""
    log = logging.get_logger("formatstreams.tests")
    with caplog.at_level(logging.TRACE_LEVEL, logger="formatstreams"):
        log.trace("tracing %s", "value")
    assert [(r.levelname, r.getMessage()) for r in caplog.records] == [("TRACE", "tracing value")]


def test_chalk_formatter_keeps_message() -> None:
    """Colored output still contains the formatted message."""
    formatter = logging.ChalkFormatter(logging.LOG_FORMAT)
    record = std_logging.LogRecord("x", std_logging.WARNING, __file__, 1, "careful", None, None)
    assert "careful" in formatter.format(record)


def test_setup_logging_configures_package_logger_only(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Repeated setup keeps one handler on the package logger and leaves root alone."""
    root_handlers = list(std_logging.getLogger().handlers)
    package = std_logging.getLogger(logging.PACKAGE_LOGGER)
    try:
        logging.setup_logging(std_logging.INFO, color=False)
        logging.setup_logging(std_logging.INFO, color=False)
        ours = [h for h in package.handlers if type(h).__name__ == "_StderrHandler"]
        assert len(ours) == 1
        assert std_logging.getLogger().handlers == root_handlers
        assert package.level == std_logging.INFO

        capsys.readouterr()
        logging.get_logger("formatstreams.tests").info("plain %d", 1)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "formatstreams: INFO: plain 1" in captured.err
    finally:
        logging.setup_logging(level=logging.TRACE_LEVEL)


def test_setup_logging_defaults_to_env_then_warning(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit level, the environment wins over the WARNING default."""
    package = std_logging.getLogger(logging.PACKAGE_LOGGER)
    try:
        logging.setup_logging()
        assert package.level == logging.DEFAULT_LEVEL
        monkeypatch.setenv(logging.LOG_LEVEL_ENV_VAR, "debug")
        logging.setup_logging()
        assert package.level == std_logging.DEBUG
    finally:
        logging.setup_logging(level=logging.TRACE_LEVEL)
