# topmark:header:start
#
#   project      : FormatStreams
#   file         : registry.py
#   file_relpath : src/formatstreams/registry/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read-only bindings view over a streamer registry.

`Binding` joins a format with its registered streamers and favorites in a
stable, serializable shape. The CLI renders these; integrators can use them
to inspect what resolution will do without triggering it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from formatstreams.errors import ResolutionError

from .streamers import StreamerRegistry, default_registry

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
class Binding:
    """Joined view of a format and its streamers.

    Attributes:
        format_id: Format identifier.
        handlers: Names of the registered streamers, in registration order.
        favorite: Name of the per-format favorite, if any.
        resolved: Name of the streamer `resolve` would return, or ``None``
            when resolution fails.
        error: Message of the resolution failure, if any.
    """

    format_id: str
    handlers: tuple[str, ...]
    favorite: str | None
    resolved: str | None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "format": self.format_id,
            "handlers": list(self.handlers),
            "favorite": self.favorite,
            "resolved": self.resolved,
            "error": self.error,
        }


def iter_bindings(registry: StreamerRegistry | None = None) -> Iterator[Binding]:
    """Iterate bindings for every format with a registered streamer (sorted by format).

    Yields:
        Binding: Format, streamers, favorite and resolution outcome.
    """
    reg = registry if registry is not None else default_registry()
    for format_id in reg.formats():
        favorite = reg.favorite_for(format_id)
        resolved: str | None = None
        error: str | None = None
        try:
            resolved = reg.resolve(format_id).name
        except ResolutionError as exc:
            error = str(exc)
        yield Binding(
            format_id=format_id,
            handlers=tuple(h.name for h in reg.handlers_for(format_id)),
            favorite=favorite.name if favorite is not None else None,
            resolved=resolved,
            error=error,
        )
