# topmark:header:start
#
#   project      : FormatStreams
#   file         : jsonlines.py
#   file_relpath : src/formatstreams/streams/jsonlines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSON Lines streamer.

Reads and appends newline-delimited JSON documents (one value per line) over
a binary stream. Blank lines are skipped. This is the built-in streamer for
``application/jsonl`` and an example of the constructor contract:

```python
@streamer(JSONLINES, JSONLINES_FORMAT)
def open_jsonlines(handler, format_id, io, *, encoding="utf-8"):
    return JsonLinesStream(io, encoding=encoding)
```
"""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING, Any, Final

from formatstreams.config.logging import FormatStreamsLogger, get_logger
from formatstreams.constants import JSONLINES_FORMAT
from formatstreams.handlers import FormatHandler

from .base import Capability, FormattedStream
from .memory import copy_into

if TYPE_CHECKING:
    from formatstreams.registry.streamers import StreamerRegistry

logger: FormatStreamsLogger = get_logger(__name__)

JSONLINES: Final[FormatHandler] = FormatHandler(
    "jsonlines", description="Newline-delimited JSON values (standard library json)"
)


class JsonLinesStream(FormattedStream[Any]):
    """Stream of JSON values, one per line.

    Writing is append-only: `write` fails unless the cursor is at the end of
    the data. `seek` re-scans from the start of the data.

    Args:
        io (IO[bytes]): Binary stream positioned at the first line. The stream
            takes ownership and closes it on `close`.
        encoding (str): Text encoding of the lines.
    """

    capabilities = frozenset(
        {Capability.READ, Capability.READ_INTO, Capability.SEEK, Capability.WRITE}
    )

    def __init__(self, io: IO[bytes], *, encoding: str = "utf-8") -> None:
        self._io = io
        self._encoding = encoding
        self._pos = 0
        self._pending: bytes | None = None
        self._ends_with_newline = True
        self._start: int | None = io.tell() if io.seekable() else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(io={self._io!r}, position={self._pos})"

    def _peek(self) -> bytes | None:
        """Return the next non-blank line without consuming it, or None at end."""
        if self._pending is None and self._io.readable():
            for line in iter(self._io.readline, b""):
                self._ends_with_newline = line.endswith(b"\n")
                if line.strip():
                    self._pending = line
                    break
        return self._pending

    def position(self) -> int:
        return self._pos

    def eof(self) -> bool:
        self._check_open()
        return self._peek() is None

    def seekstart(self) -> None:
        self._check_open()
        if self._start is None:
            if self._pos == 0:
                return
            raise OSError("underlying stream is not seekable")
        self._io.seek(self._start)
        self._pending = None
        self._ends_with_newline = True
        self._pos = 0

    def read(self) -> Any:
        self._check_open()
        line = self._peek()
        if line is None:
            raise EOFError("end of stream")
        self._pending = None
        self._pos += 1
        return json.loads(line.decode(self._encoding))

    def read_into(self, output: Any) -> Any:
        return copy_into(self.read(), output)

    def seek(self, n: int) -> None:
        if n < 0:
            raise ValueError("seek position must be non-negative")
        self.seekstart()
        while self._pos < n:
            if self._peek() is None:
                raise ValueError(f"seek position {n} past end of stream ({self._pos} values)")
            self._pending = None
            self._pos += 1

    def write(self, value: Any) -> None:
        if not self.eof():
            raise ValueError("JSON Lines streams can only be written at the end of the data")
        # Unterminated last line: finish it so the new value gets its own line.
        prefix = b"" if self._ends_with_newline else b"\n"
        self._io.write(prefix + (json.dumps(value) + "\n").encode(self._encoding))
        self._ends_with_newline = True
        self._pos += 1

    def _close(self) -> None:
        self._io.close()


def open_jsonlines(
    handler: FormatHandler, format_id: str, io: IO[bytes], *, encoding: str = "utf-8"
) -> JsonLinesStream:
    """Constructor bound to ``(JSONLINES, "application/jsonl")``."""
    logger.debug("Opening %s stream with %s", format_id, handler)
    return JsonLinesStream(io, encoding=encoding)


def register(registry: StreamerRegistry) -> None:
    """Register the JSON Lines streamer in *registry*."""
    registry.register(JSONLINES_FORMAT, JSONLINES)
    registry.bind(JSONLINES, JSONLINES_FORMAT, open_jsonlines)
