# topmark:header:start
#
#   project      : FormatStreams
#   file         : memory.py
#   file_relpath : src/formatstreams/streams/memory.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""In-memory formatted stream backed by a Python list.

`SequenceStream` implements every optional capability and is the reference
implementation of the stream contract. It is handy for tests and for
adapting already-decoded data to APIs that expect a `FormattedStream`.
"""

from __future__ import annotations

from collections.abc import MutableMapping, MutableSequence
from typing import TYPE_CHECKING, Callable, TypeVar

from .base import Capability, FormattedStream

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")


def copy_into(value: T, output: T) -> T:
    """Copy the contents of *value* into *output* in place and return *output*.

    Supports mutable mappings, mutable sequences and plain objects (through
    their ``__dict__``).

    Raises:
        TypeError: If *output* cannot be updated in place.
    """
    if isinstance(output, MutableMapping):
        output.clear()
        output.update(value)  # type: ignore[call-overload]
    elif isinstance(output, MutableSequence):
        output[:] = value  # type: ignore[index]
    elif hasattr(output, "__dict__"):
        vars(output).clear()
        vars(output).update(vars(value))
    else:
        raise TypeError(f"cannot copy into {type(output).__name__} in place")
    return output


class SequenceStream(FormattedStream[T]):
    """Stream over a list of values.

    Args:
        values (Iterable[T] | None): Initial values; copied into a new list.
        copier (Callable[[T, T], T] | None): Function copying a value into a
            caller-supplied output for `read_into`. Defaults to `copy_into`.
    """

    capabilities = frozenset(Capability)

    def __init__(
        self,
        values: Iterable[T] | None = None,
        *,
        copier: Callable[[T, T], T] | None = None,
    ) -> None:
        self._values: list[T] = list(values or ())
        self._pos = 0
        self._copier: Callable[[T, T], T] = copier or copy_into

    def __repr__(self) -> str:
        return f"{type(self).__name__}(position={self._pos}, length={len(self._values)})"

    @property
    def values(self) -> list[T]:
        """A copy of the stored values."""
        return list(self._values)

    def position(self) -> int:
        return self._pos

    def eof(self) -> bool:
        return self._pos >= len(self._values)

    def seekstart(self) -> None:
        self._check_open()
        self._pos = 0

    def _next(self) -> T:
        self._check_open()
        if self.eof():
            raise EOFError("end of stream")
        value = self._values[self._pos]
        self._pos += 1
        return value

    def read(self) -> T:
        return self._next()

    def read_into(self, output: T) -> T:
        return self._copier(self._next(), output)

    def seek(self, n: int) -> None:
        self._check_open()
        if not 0 <= n <= len(self._values):
            raise ValueError(f"seek position {n} out of range 0..{len(self._values)}")
        self._pos = n

    def seekend(self) -> None:
        self._check_open()
        self._pos = len(self._values)

    def length(self) -> int:
        return len(self._values)

    def write(self, value: T) -> None:
        self._check_open()
        if self._pos < len(self._values):
            self._values[self._pos] = value
        else:
            self._values.append(value)
        self._pos += 1

    def truncate(self, n: int) -> None:
        self._check_open()
        if n < 0:
            raise ValueError("truncate length must be non-negative")
        del self._values[n:]
        self._pos = min(self._pos, n)
