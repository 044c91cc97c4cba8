# topmark:header:start
#
#   project      : FormatStreams
#   file         : base.py
#   file_relpath : src/formatstreams/streams/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Abstract base class for all formatted streams.

A formatted stream is a cursor over a sequence of decoded values. Every
stream supports a small mandatory core (`position`, `eof`, `seekstart`,
`close`); everything else is optional and declared per concrete class through
`FormattedStream.capabilities`:

```python
class TrajectoryStream(FormattedStream[Frame]):
    capabilities = frozenset({Capability.READ, Capability.SEEK})
```

Callers check `supports()` before using an optional operation. Calling an
operation that is not declared raises `UnsupportedOperationError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from formatstreams.config.logging import FormatStreamsLogger, get_logger
from formatstreams.errors import UnsupportedOperationError

if TYPE_CHECKING:
    from types import TracebackType

logger: FormatStreamsLogger = get_logger(__name__)

T = TypeVar("T")
S = TypeVar("S", bound="FormattedStream[Any]")


class Capability(Enum):
    """Optional operations a stream type may declare.

    Each value is the name of the `FormattedStream` method implementing it.

    Attributes:
        READ: Sequential `read()` of the next value.
        READ_INTO: `read_into(output)` decoding into a caller-supplied value.
        SEEK: `seek(n)` to a value index.
        SEEK_END: `seekend()` past the last value.
        LENGTH: `length()` known without scanning.
        WRITE: `write(value)` at the current position.
        TRUNCATE: `truncate(n)` to *n* values.
    """

    READ = "read"
    READ_INTO = "read_into"
    SEEK = "seek"
    SEEK_END = "seekend"
    LENGTH = "length"
    WRITE = "write"
    TRUNCATE = "truncate"


class FormattedStream(ABC, Generic[T]):
    """Base type for streams of formatted values of type ``T``.

    Streams have a single owner and are not thread safe. `close` is
    idempotent; streams are also context managers closing on exit.

    Attributes:
        capabilities (frozenset[Capability]): Optional operations implemented by
            the concrete class. Declaring a capability without overriding the
            matching method is rejected when the class is created.
    """

    capabilities: ClassVar[frozenset[Capability]] = frozenset()

    _closed: bool = False
    _attached: list[Any] | None = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for cap in cls.capabilities:
            if getattr(cls, cap.value) is getattr(FormattedStream, cap.value):
                raise TypeError(
                    f"{cls.__name__} declares {cap.name} but does not implement {cap.value}()"
                )

    # --- Capability queries ---

    @classmethod
    def supports(cls, capability: Capability) -> bool:
        """Return True if this stream type declares *capability*."""
        return capability in cls.capabilities

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(operation, type(self))

    # --- Mandatory operations ---

    @abstractmethod
    def position(self) -> int:
        """Return the index of the next value."""

    @abstractmethod
    def eof(self) -> bool:
        """Return True if no value is left to read."""

    @abstractmethod
    def seekstart(self) -> None:
        """Move the cursor back to the first value."""

    @property
    def closed(self) -> bool:
        """Whether `close` has been called."""
        return self._closed

    def close(self) -> None:
        """Release the stream's resources. Later calls do nothing.

        The stream counts as closed even if releasing a resource fails; the
        failure propagates once and is not retried.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self._close()
        finally:
            attached, self._attached = self._attached or [], None
            for resource in reversed(attached):
                resource.close()

    def _close(self) -> None:
        """Release resources owned by the concrete stream (override as needed)."""

    def attach(self, resource: Any) -> None:
        """Close *resource* after this stream is closed.

        Used when the stream reads through a wrapper (e.g. a decompressor)
        whose underlying file must be released as well.
        """
        if self._attached is None:
            self._attached = []
        self._attached.append(resource)

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError(f"I/O operation on closed {type(self).__name__}")

    # --- Optional operations ---

    def read(self) -> T:
        """Return the next value. Raises EOFError at end of data."""
        raise self._unsupported("read")

    def read_into(self, output: T) -> T:
        """Decode the next value into *output* and return it. Raises EOFError at end of data."""
        raise self._unsupported("read_into")

    def seek(self, n: int) -> None:
        """Move the cursor to value index *n*."""
        raise self._unsupported("seek")

    def seekend(self) -> None:
        """Move the cursor past the last value."""
        raise self._unsupported("seekend")

    def length(self) -> int:
        """Return the number of values."""
        raise self._unsupported("length")

    def write(self, value: T) -> None:
        """Write *value* at the current position and advance past it."""
        raise self._unsupported("write")

    def truncate(self, n: int) -> None:
        """Keep only the first *n* values."""
        raise self._unsupported("truncate")

    # --- Context manager ---

    def __enter__(self: S) -> S:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is None:
            self.close()
            return
        try:
            self.close()
        except Exception:
            logger.exception("Error while closing %s", type(self).__name__)
