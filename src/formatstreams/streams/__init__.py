# topmark:header:start
#
#   project      : FormatStreams
#   file         : __init__.py
#   file_relpath : src/formatstreams/streams/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatted stream types and built-in streamers.

* `FormattedStream` and `Capability` define the stream contract.
* `SequenceStream` is an in-memory implementation of the full contract.
* `JsonLinesStream` is the built-in ``application/jsonl`` streamer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from formatstreams.config.logging import FormatStreamsLogger, get_logger

from .base import Capability, FormattedStream
from .jsonlines import JSONLINES, JsonLinesStream
from .memory import SequenceStream, copy_into

if TYPE_CHECKING:
    from formatstreams.registry.streamers import StreamerRegistry

logger: FormatStreamsLogger = get_logger(__name__)

_BUILTIN_MODULES: Final[tuple[str, ...]] = ("formatstreams.streams.jsonlines",)


def register_builtin_streamers(registry: StreamerRegistry) -> None:
    """Register the built-in streamers in *registry*.

    Each built-in module exposes ``register(registry)``, the same hook shape
    used by plugin entry points.
    """
    from importlib import import_module

    for modname in _BUILTIN_MODULES:
        import_module(modname).register(registry)
        logger.debug("Registered built-in streamers from %s", modname)


__all__ = [
    "Capability",
    "FormattedStream",
    "JSONLINES",
    "JsonLinesStream",
    "SequenceStream",
    "copy_into",
    "register_builtin_streamers",
]
