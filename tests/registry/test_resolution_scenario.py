# topmark:header:start
#
#   project      : FormatStreams
#   file         : test_resolution_scenario.py
#   file_relpath : tests/registry/test_resolution_scenario.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end walk through registration, ambiguity and preference for one format.

The steps build on each other, so they are kept in a single test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from formatstreams.errors import (
    AmbiguousHandlerError,
    DuplicateRegistrationError,
    UnregisteredHandlerPreferenceError,
)
from formatstreams.handlers import FormatHandler

if TYPE_CHECKING:
    from formatstreams.registry.streamers import StreamerRegistry


def test_two_streamers_then_favorite(
    registry: StreamerRegistry, h1: FormatHandler, h2: FormatHandler
) -> None:
    """Register H1 and H2 for ``x``, prefer H1, then fail to register H1 again."""
    registry.register("x", h1)
    registry.register("x", h2)
    with pytest.raises(AmbiguousHandlerError) as excinfo:
        registry.resolve("x")
    assert excinfo.value.candidates == (h1, h2)

    registry.prefer(h1, "x")
    assert registry.resolve("x") == h1

    with pytest.raises(DuplicateRegistrationError):
        registry.register("x", h1)

    assert registry.handlers_for("x") == (h1, h2)
    assert registry.resolve("x") == h1


def test_favorite_for_unregistered_handler_keeps_state(
    registry: StreamerRegistry, h1: FormatHandler, h2: FormatHandler
) -> None:
    """A rejected preference leaves handlers and favorite untouched."""
    registry.register("x", h1)
    registry.register("x", h2)
    registry.prefer(h1, "x")

    with pytest.raises(UnregisteredHandlerPreferenceError):
        registry.prefer(FormatHandler("h3"), "x")

    assert registry.handlers_for("x") == (h1, h2)
    assert registry.favorite_for("x") == h1
