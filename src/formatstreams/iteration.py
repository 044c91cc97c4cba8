# topmark:header:start
#
#   project      : FormatStreams
#   file         : iteration.py
#   file_relpath : src/formatstreams/iteration.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lazy iteration over the values of a formatted stream.

Both adapters rewind the stream each time iteration starts, so iterating
again reproduces the same values as long as nothing else moved or modified
the stream. They share the stream's cursor: two iterations interleaved over
one stream interfere with each other.

`eachval_into` yields the *same* output object at every step, updated in
place. Copy it if a value has to outlive the next step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from formatstreams.errors import UnsupportedOperationError
from formatstreams.streams.base import Capability

if TYPE_CHECKING:
    from collections.abc import Iterator

    from formatstreams.streams.base import FormattedStream

T = TypeVar("T")


class ValueIterator(Generic[T]):
    """Iterable over the values of a stream, read with `FormattedStream.read`."""

    def __init__(self, stream: FormattedStream[T]) -> None:
        if not stream.supports(Capability.READ):
            raise UnsupportedOperationError("read", type(stream))
        self.stream = stream

    def __iter__(self) -> Iterator[T]:
        stream = self.stream
        stream.seekstart()
        while not stream.eof():
            yield stream.read()


class BufferedValueIterator(Generic[T]):
    """Iterable over the values of a stream, decoded into one reusable *output*."""

    def __init__(self, stream: FormattedStream[T], output: T) -> None:
        if not stream.supports(Capability.READ_INTO):
            raise UnsupportedOperationError("read_into", type(stream))
        self.stream = stream
        self.output = output

    def __iter__(self) -> Iterator[T]:
        stream = self.stream
        stream.seekstart()
        while not stream.eof():
            yield stream.read_into(self.output)


def eachval(stream: FormattedStream[T]) -> ValueIterator[T]:
    """Iterate over the values contained in *stream*."""
    return ValueIterator(stream)


def eachval_into(stream: FormattedStream[T], output: T) -> BufferedValueIterator[T]:
    """Iterate over the values contained in *stream*, reading into *output*."""
    return BufferedValueIterator(stream, output)
