# topmark:header:start
#
#   project      : FormatStreams
#   file         : __init__.py
#   file_relpath : src/formatstreams/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Streamer registry.

Most integrators only need the decorator and the preference helpers:

```python
from formatstreams.registry import FormatHandler, prefer_streamer, streamer

FAST = FormatHandler("fast-xtc")

@streamer(FAST, "trajectory/x-xtc")
def open_xtc(handler, format_id, io):
    return FastXtcStream(io)

prefer_streamer(FAST, "trajectory/x-xtc")
```

Tests and embedders can build an isolated `StreamerRegistry` and pass it
explicitly, or temporarily empty the default one with `new_registry` /
`StreamerRegistry.scoped`.
"""

from __future__ import annotations

from formatstreams.handlers import FormatHandler

from .plugins import load_plugins
from .registry import Binding, iter_bindings
from .streamers import (
    Constructor,
    StreamerRegistry,
    add_streamer,
    default_registry,
    new_registry,
    prefer_streamer,
    resolve_streamer,
    streamer,
)

__all__ = [
    "Binding",
    "Constructor",
    "FormatHandler",
    "StreamerRegistry",
    "add_streamer",
    "default_registry",
    "iter_bindings",
    "load_plugins",
    "new_registry",
    "prefer_streamer",
    "resolve_streamer",
    "streamer",
]
