# topmark:header:start
#
#   project      : FormatStreams
#   file         : errors.py
#   file_relpath : src/formatstreams/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the FormatStreams CLI.

Commands translate library failures into these exceptions with
`cli_error_from`, so each failure category maps to a stable exit code.
"""

from __future__ import annotations

from typing import IO, Any

import click

from formatstreams.cli.exit_codes import ExitCode
from formatstreams.errors import (
    ClassificationError,
    ConfigError,
    MissingConstructorError,
    ResolutionError,
    UnknownCodingError,
)


class FormatStreamsCliError(click.ClickException):
    """Base class for all FormatStreams CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(self.format_message())
                return
        super().show(file)


class UsageCliError(FormatStreamsCliError):
    """Command-line invocation error (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class DataCliError(FormatStreamsCliError):
    """Resource could not be classified or decoded."""

    exit_code = ExitCode.DATA_ERROR


class FileNotFoundCliError(FormatStreamsCliError):
    """Input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class UnavailableCliError(FormatStreamsCliError):
    """No usable streamer or coding transform."""

    exit_code = ExitCode.UNAVAILABLE


class SoftwareCliError(FormatStreamsCliError):
    """Streamer contract violation."""

    exit_code = ExitCode.SOFTWARE_ERROR


class IOCliError(FormatStreamsCliError):
    """I/O error while reading a resource."""

    exit_code = ExitCode.IO_ERROR


class ConfigCliError(FormatStreamsCliError):
    """Invalid configuration."""

    exit_code = ExitCode.CONFIG_ERROR


def cli_error_from(exc: Exception) -> FormatStreamsCliError:
    """Map a library or I/O exception to the matching CLI error."""
    msg = str(exc)
    if isinstance(exc, ConfigError):
        return ConfigCliError(msg)
    if isinstance(exc, (ResolutionError, UnknownCodingError)):
        return UnavailableCliError(msg)
    if isinstance(exc, MissingConstructorError):
        return SoftwareCliError(msg)
    if isinstance(exc, FileNotFoundError):
        return FileNotFoundCliError(msg)
    if isinstance(exc, OSError):
        return IOCliError(msg)
    if isinstance(exc, (ClassificationError, ValueError)):
        return DataCliError(msg)
    return FormatStreamsCliError(msg)
