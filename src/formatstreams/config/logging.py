# topmark:header:start
#
#   project      : FormatStreams
#   file         : logging.py
#   file_relpath : src/formatstreams/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics logging for FormatStreams.

Every module logs through `get_logger(__name__)`, so all records live under
the ``formatstreams`` logger. `setup_logging` configures that package logger
only (never the root logger), which keeps the library polite when embedded.

Diagnostics always go to ``stderr``: the CLI writes decoded values to
``stdout`` (e.g. ``dump --output-format ndjson``) and that stream must stay
parseable. A TRACE level below DEBUG carries per-value detail (classification,
decoding, favorite selection).

Levels can be forced from the environment:

```sh
FORMATSTREAMS_LOG_LEVEL=trace formatstreams dump events.jsonl.gz
```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Callable, Final, TextIO, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Mapping

PACKAGE_LOGGER: Final[str] = "formatstreams"

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "FORMATSTREAMS_LOG_LEVEL"

DEFAULT_LEVEL: Final[int] = logging.WARNING

LOG_FORMAT: Final[str] = "formatstreams: %(levelname)s: %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "formatstreams: %(levelname)s [%(name)s:%(lineno)d] %(message)s"

logging.addLevelName(TRACE_LEVEL, "TRACE")


class FormatStreamsLogger(logging.Logger):
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


logging.setLoggerClass(FormatStreamsLogger)

# Lowest level first; a record takes the style of the highest threshold it reaches.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (TRACE_LEVEL, chalk.blue),
    (logging.DEBUG, chalk.gray),
    (logging.INFO, chalk.green),
    (logging.WARNING, chalk.yellow),
    (logging.ERROR, chalk.red),
    (logging.CRITICAL, chalk.red_bright),
)


class ChalkFormatter(logging.Formatter):
    """Formatter coloring each record by severity with yachalk."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        style: Callable[[str], str] = chalk.dim
        for threshold, candidate in _LEVEL_STYLES:
            if record.levelno >= threshold:
                style = candidate
        return style(message)


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Handler writing to whatever ``sys.stderr`` is at emit time.

    Click's test runner and other harnesses swap ``sys.stderr``; binding the
    stream at setup would keep writing to a closed replacement.
    """

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self) -> TextIO:  # type: ignore[override]
        return sys.stderr


def parse_log_level(value: str) -> int | None:
    """Return the level for a name (``"trace"``, ``"warn"``...) or number, else None."""
    v = value.strip().upper()
    if not v:
        return None
    if v.isdigit():
        return int(v)
    if v == "TRACE":
        return TRACE_LEVEL
    level = logging.getLevelName(v)
    return level if isinstance(level, int) else None


def resolve_env_log_level() -> int | None:
    """Return the level set in ``FORMATSTREAMS_LOG_LEVEL``, or None if unset or invalid."""
    return parse_log_level(os.environ.get(LOG_LEVEL_ENV_VAR, ""))


def setup_logging(level: int | None = None, *, color: bool = True) -> None:
    """Configure the ``formatstreams`` logger.

    Replaces the handler installed by a previous call, leaving handlers added
    by the application (or by pytest's ``caplog``) alone.

    Args:
        level (int | None): Threshold; defaults to the environment, then WARNING.
        color (bool): Colorize records with yachalk.
    """
    if level is None:
        level = resolve_env_log_level() or DEFAULT_LEVEL

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for existing in package_logger.handlers[:]:
        if isinstance(existing, _StderrHandler):
            package_logger.removeHandler(existing)

    fmt = LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT
    handler = _StderrHandler()
    handler.setFormatter(ChalkFormatter(fmt) if color else logging.Formatter(fmt))
    package_logger.addHandler(handler)


def get_logger(name: str) -> FormatStreamsLogger:
    """Return the `FormatStreamsLogger` called *name* (normally ``__name__``)."""
    return cast("FormatStreamsLogger", logging.getLogger(name))
