# topmark:header:start
#
#   project      : FormatStreams
#   file         : handlers.py
#   file_relpath : src/formatstreams/handlers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Streamer identity tokens.

A `FormatHandler` names one streaming backend. It carries no behavior: the
registry maps it to formats, and the `(handler, format)` pair selects the
constructor that opens a stream. Handlers are frozen and hashable so they can
be used directly as dictionary keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FormatHandler:
    """Identity of a streamer backend.

    Attributes:
        name (str): Unique, human-readable identifier (e.g. ``"jsonlines"``).
        description (str): Optional free-text description; ignored for equality.
    """

    name: str
    description: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("FormatHandler.name must be a non-empty string")

    def __str__(self) -> str:
        return self.name
