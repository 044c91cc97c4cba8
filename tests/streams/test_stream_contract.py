# topmark:header:start
#
#   project      : FormatStreams
#   file         : test_stream_contract.py
#   file_relpath : tests/streams/test_stream_contract.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the `FormattedStream` capability contract and lifecycle."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from formatstreams.errors import UnsupportedOperationError
from formatstreams.streams import Capability
from tests.conftest import CountingStream, MinimalStream, parametrize


@parametrize(
    "operation, args",
    [
        ("read", ()),
        ("read_into", (0,)),
        ("seek", (1,)),
        ("seekend", ()),
        ("length", ()),
        ("write", (1,)),
        ("truncate", (0,)),
    ],
)
def test_undeclared_operations_raise(operation: str, args: tuple[Any, ...]) -> None:
    """Optional operations not declared by the stream raise `UnsupportedOperationError`."""
    stream = MinimalStream()
    assert not stream.supports(Capability(operation))

    with pytest.raises(UnsupportedOperationError) as excinfo:
        getattr(stream, operation)(*args)

    assert excinfo.value.operation == operation
    assert excinfo.value.stream_type is MinimalStream
    assert isinstance(excinfo.value, NotImplementedError)


def test_declared_but_missing_capability_rejected() -> None:
    """Declaring a capability without implementing it fails at class creation."""
    with pytest.raises(TypeError, match="READ"):

        class Broken(MinimalStream):  # pyright: ignore[reportUnusedClass]
            capabilities = frozenset({Capability.READ})


def test_close_is_idempotent() -> None:
    """Closing twice releases resources once."""
    stream = CountingStream([1])
    stream.close()
    stream.close()

    assert stream.closed
    assert stream.close_calls == 2
    assert stream.releases == 1


def test_operations_after_close_fail() -> None:
    """A closed stream refuses cursor operations."""
    stream = CountingStream([1, 2])
    stream.close()
    with pytest.raises(ValueError, match="closed"):
        stream.read()
    with pytest.raises(ValueError, match="closed"):
        stream.seekstart()


class _Resource:
    def __init__(self, log: list[str], name: str) -> None:
        self.log = log
        self.name = name

    def close(self) -> None:
        self.log.append(self.name)


def test_attached_resources_closed_after_stream() -> None:
    """Attached resources are closed once, after the stream, in reverse order."""
    log: list[str] = []
    stream = CountingStream()
    stream.attach(_Resource(log, "first"))
    stream.attach(_Resource(log, "second"))

    stream.close()
    stream.close()

    assert log == ["second", "first"]


def test_attached_resources_closed_even_if_release_fails() -> None:
    """A failing release still closes attached resources and propagates once."""
    log: list[str] = []
    stream = CountingStream(fail_on_close=True)
    stream.attach(_Resource(log, "raw"))

    with pytest.raises(OSError, match="release failed"):
        stream.close()
    stream.close()

    assert log == ["raw"]
    assert stream.releases == 1


def test_context_manager_closes() -> None:
    """Leaving the `with` block closes the stream."""
    with CountingStream([1]) as stream:
        assert not stream.closed
    assert stream.closed
    assert stream.close_calls == 1


def test_context_manager_logs_close_failure_during_error(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A close failure while an error propagates is logged, not raised."""
    stream = CountingStream(fail_on_close=True)
    with caplog.at_level(logging.ERROR, logger="formatstreams"):
        with pytest.raises(KeyError):
            with stream:
                raise KeyError("callback")

    assert stream.close_calls == 1
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors and "CountingStream" in errors[0].getMessage()


def test_context_manager_raises_close_failure_without_error() -> None:
    """Without a pending error, a close failure propagates."""
    with pytest.raises(OSError, match="release failed"):
        with CountingStream(fail_on_close=True):
            pass
