# topmark:header:start
#
#   project      : FormatStreams
#   file         : codings.py
#   file_relpath : src/formatstreams/codings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coding transforms applied between a raw byte stream and a streamer.

A coding transform is any callable that wraps an open binary stream and
returns another one (typically a decompressor). The registry here only maps
coding identifiers to such callables; the default instance binds the standard
library file wrappers for gzip, bzip2 and xz.
"""

from __future__ import annotations

import bz2
import gzip
import lzma
from functools import lru_cache
from typing import IO, Callable

from formatstreams.config.logging import FormatStreamsLogger, get_logger
from formatstreams.constants import BZIP2_CODING, GZIP_CODING, XZ_CODING
from formatstreams.errors import UnknownCodingError

logger: FormatStreamsLogger = get_logger(__name__)

Transform = Callable[[IO[bytes]], IO[bytes]]


def _gzip(io: IO[bytes]) -> IO[bytes]:
    return gzip.GzipFile(fileobj=io)


def _bzip2(io: IO[bytes]) -> IO[bytes]:
    return bz2.BZ2File(io)


def _xz(io: IO[bytes]) -> IO[bytes]:
    return lzma.LZMAFile(io)


class CodingRegistry:
    """Mapping of coding identifiers to transform constructors."""

    def __init__(self) -> None:
        self._transforms: dict[str, Transform] = {}

    def register(self, coding_id: str, transform: Transform) -> None:
        """Bind *transform* to *coding_id*, replacing any previous binding."""
        if coding_id in self._transforms:
            logger.warning("replacing transform for coding %s", coding_id)
        self._transforms[coding_id] = transform

    def unregister(self, coding_id: str) -> bool:
        """Remove the transform bound to *coding_id*; return True if one existed."""
        return self._transforms.pop(coding_id, None) is not None

    def transform_for(self, coding_id: str) -> Transform:
        """Return the transform constructor for *coding_id*.

        Raises:
            UnknownCodingError: If no transform is bound to the identifier.
        """
        try:
            return self._transforms[coding_id]
        except KeyError:
            raise UnknownCodingError(coding_id) from None

    def names(self) -> tuple[str, ...]:
        """Return the registered coding identifiers (sorted)."""
        return tuple(sorted(self._transforms))


@lru_cache(maxsize=1)
def default_codings() -> CodingRegistry:
    """Return (and cache) the process-wide coding registry."""
    registry = CodingRegistry()
    registry.register(GZIP_CODING, _gzip)
    registry.register(BZIP2_CODING, _bzip2)
    registry.register(XZ_CODING, _xz)
    return registry
