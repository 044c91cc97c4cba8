# topmark:header:start
#
#   project      : FormatStreams
#   file         : errors.py
#   file_relpath : src/formatstreams/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by FormatStreams.

Every registry-contract violation is a distinct exception type carrying the
offending identifiers as attributes, so callers can branch on the failure
(e.g. pick a favorite on `AmbiguousHandlerError`, register a streamer on
`NoHandlerRegisteredError`) without matching message text.

Usage:
    ```python
    try:
        handler = resolve_streamer("trajectory/x-xtc")
    except AmbiguousHandlerError as exc:
        prefer_streamer(exc.candidates[0], exc.format_id)
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from formatstreams.handlers import FormatHandler


class FormatStreamsError(Exception):
    """Base class for all FormatStreams errors."""


# --- Registry contract violations ---


class RegistryError(FormatStreamsError):
    """Base class for invalid registry mutations."""


class DuplicateRegistrationError(RegistryError):
    """A handler (or a constructor binding) is already registered for a format."""

    def __init__(self, handler: FormatHandler, format_id: str) -> None:
        self.handler = handler
        self.format_id = format_id
        super().__init__(f"streamer {handler} already registered for {format_id}")


class AlreadyGlobalFavoriteError(RegistryError):
    """A handler is already globally preferred."""

    def __init__(self, handler: FormatHandler) -> None:
        self.handler = handler
        super().__init__(f"streamer {handler} is already globally preferred")


class UnregisteredHandlerPreferenceError(RegistryError):
    """A per-format favorite names a handler not registered for that format."""

    def __init__(self, handler: FormatHandler, format_id: str) -> None:
        self.handler = handler
        self.format_id = format_id
        super().__init__(f"streamer {handler} is not registered for {format_id}")


class MissingConstructorError(RegistryError):
    """No constructor is bound to a `(handler, format)` pair."""

    def __init__(self, handler: FormatHandler, format_id: str) -> None:
        self.handler = handler
        self.format_id = format_id
        super().__init__(f"streamer {handler} has no constructor for {format_id}")


# --- Resolution failures ---


class ResolutionError(FormatStreamsError, LookupError):
    """Base class for failures to pick a handler for a format."""

    def __init__(self, format_id: str, message: str) -> None:
        self.format_id = format_id
        super().__init__(message)


class NoHandlerRegisteredError(ResolutionError):
    """No handler is registered for the requested format."""

    def __init__(self, format_id: str) -> None:
        super().__init__(format_id, f"no streamer registered for {format_id}")


class AmbiguousHandlerError(ResolutionError):
    """Several handlers are registered and no favorite breaks the tie.

    Attributes:
        candidates (tuple[FormatHandler, ...]): All handlers registered for the
            format, in registration order.
    """

    def __init__(self, format_id: str, candidates: Sequence[FormatHandler]) -> None:
        self.candidates: tuple[FormatHandler, ...] = tuple(candidates)
        names = ", ".join(str(c) for c in self.candidates)
        super().__init__(
            format_id,
            f"multiple streamers available for {format_id}: {names}; "
            "use prefer_streamer() to pick one",
        )


# --- Collaborator failures ---


class ClassificationError(FormatStreamsError):
    """The format of a resource could not be inferred."""

    def __init__(self, resource: object, reason: str = "unknown format") -> None:
        self.resource = resource
        super().__init__(f"cannot classify {resource!r}: {reason}")


class UnknownCodingError(FormatStreamsError, LookupError):
    """No transform is registered for a coding identifier."""

    def __init__(self, coding_id: str) -> None:
        self.coding_id = coding_id
        super().__init__(f"no transform registered for coding {coding_id}")


# --- Stream capabilities ---


class UnsupportedOperationError(FormatStreamsError, NotImplementedError):
    """An optional stream operation was invoked on a stream that does not declare it."""

    def __init__(self, operation: str, stream_type: type) -> None:
        self.operation = operation
        self.stream_type = stream_type
        super().__init__(f"{stream_type.__name__} does not support {operation}()")


# --- Configuration ---


class ConfigError(FormatStreamsError):
    """Missing, malformed or inconsistent configuration."""
