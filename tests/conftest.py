# topmark:header:start
#
#   project      : FormatStreams
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the FormatStreams test suite.

This file sets up global fixtures and the logging configuration for test runs.

Notes:
    Registry mutations must not leak between tests. Prefer the `registry`
    fixture (a fresh, isolated `StreamerRegistry`) and pass it explicitly;
    tests that need the process-wide registry use `scoped_default`, which
    empties it for the duration of the test and restores it afterwards.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import IO, TYPE_CHECKING, Any, TypeVar, cast

import pytest

from formatstreams.config import logging
from formatstreams.handlers import FormatHandler
from formatstreams.registry.streamers import StreamerRegistry, default_registry
from formatstreams.streams.base import FormattedStream
from formatstreams.streams.memory import SequenceStream

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_formatstreams_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


# ---------- test doubles ----------


class MinimalStream(FormattedStream[int]):
    """Stream with only the mandatory operations."""

    def __init__(self) -> None:
        self.pos = 0

    def position(self) -> int:
        return self.pos

    def eof(self) -> bool:
        return True

    def seekstart(self) -> None:
        self.pos = 0



class CountingStream(SequenceStream[Any]):
    """`SequenceStream` that counts `close()` calls and can fail on release.

    Attributes:
        close_calls (int): Number of times `close()` was called.
        releases (int): Number of times resources were actually released.
        fail_on_close (bool): Raise `OSError` when releasing resources.
    """

    def __init__(self, values: Sequence[Any] = (), *, fail_on_close: bool = False) -> None:
        super().__init__(values)
        self.close_calls = 0
        self.releases = 0
        self.fail_on_close = fail_on_close

    def close(self) -> None:
        self.close_calls += 1
        super().close()

    def _close(self) -> None:
        self.releases += 1
        if self.fail_on_close:
            raise OSError("release failed")


class StreamFactory:
    """Constructor test double recording every call and every stream it opens."""

    def __init__(self, values: Sequence[Any] = (), *, fail_on_close: bool = False) -> None:
        self.values = list(values)
        self.fail_on_close = fail_on_close
        self.calls: list[tuple[FormatHandler, str, IO[bytes], tuple[Any, ...], dict[str, Any]]] = []
        self.streams: list[CountingStream] = []

    def __call__(
        self, handler: FormatHandler, format_id: str, io: IO[bytes], *args: Any, **kwargs: Any
    ) -> CountingStream:
        self.calls.append((handler, format_id, io, args, kwargs))
        stream = CountingStream(self.values, fail_on_close=self.fail_on_close)
        self.streams.append(stream)
        return stream


def add(
    registry: StreamerRegistry,
    format_id: str,
    handler: FormatHandler,
    factory: StreamFactory | None = None,
) -> StreamFactory:
    """Register *handler* for *format_id* with a recording constructor and return it."""
    factory = factory or StreamFactory()
    registry.register(format_id, handler)
    registry.bind(handler, format_id, factory)
    return factory


@pytest.fixture
def registry() -> StreamerRegistry:
    """Return a fresh, isolated registry."""
    return StreamerRegistry()


@pytest.fixture
def scoped_default() -> Iterator[StreamerRegistry]:
    """Empty the process-wide registry for one test and restore it afterwards."""
    with default_registry().scoped() as reg:
        yield reg


@pytest.fixture
def h1() -> FormatHandler:
    """First stub handler."""
    return FormatHandler("h1")


@pytest.fixture
def h2() -> FormatHandler:
    """Second stub handler."""
    return FormatHandler("h2")
