# topmark:header:start
#
#   project      : FormatStreams
#   file         : __init__.py
#   file_relpath : src/formatstreams/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatStreams package.

FormatStreams reads, writes and detects streams of formatted values. A path,
an open byte stream, or a resource tagged with `specify` is resolved to a
streamer through a registry of format handlers, then opened as a
`FormattedStream`:

```python
from formatstreams import eachval, eachval_into, specify, streamf, with_stream

s = streamf("trajectory.jsonl.gz")
for frame in eachval(s):
    ...
s.close()

with streamf(specify("events.dat", "application/jsonl")) as s:
    for event in eachval_into(s, {}):
        ...
```
"""

from __future__ import annotations

from formatstreams.errors import (
    AlreadyGlobalFavoriteError,
    AmbiguousHandlerError,
    ClassificationError,
    ConfigError,
    DuplicateRegistrationError,
    FormatStreamsError,
    MissingConstructorError,
    NoHandlerRegisteredError,
    UnknownCodingError,
    UnregisteredHandlerPreferenceError,
    UnsupportedOperationError,
)
from formatstreams.formats import Formatted, specify
from formatstreams.handlers import FormatHandler
from formatstreams.iteration import eachval, eachval_into
from formatstreams.registry import (
    StreamerRegistry,
    add_streamer,
    default_registry,
    new_registry,
    prefer_streamer,
    resolve_streamer,
    streamer,
)
from formatstreams.resolution import dispatch, streamf, with_stream
from formatstreams.streams import Capability, FormattedStream, SequenceStream

__all__ = [
    "AlreadyGlobalFavoriteError",
    "AmbiguousHandlerError",
    "Capability",
    "ClassificationError",
    "ConfigError",
    "DuplicateRegistrationError",
    "FormatHandler",
    "FormatStreamsError",
    "Formatted",
    "FormattedStream",
    "MissingConstructorError",
    "NoHandlerRegisteredError",
    "SequenceStream",
    "StreamerRegistry",
    "UnknownCodingError",
    "UnregisteredHandlerPreferenceError",
    "UnsupportedOperationError",
    "add_streamer",
    "default_registry",
    "dispatch",
    "eachval",
    "eachval_into",
    "new_registry",
    "prefer_streamer",
    "resolve_streamer",
    "specify",
    "streamer",
    "streamf",
    "with_stream",
]
