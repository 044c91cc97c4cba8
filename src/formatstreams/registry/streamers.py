# topmark:header:start
#
#   project      : FormatStreams
#   file         : streamers.py
#   file_relpath : src/formatstreams/registry/streamers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Registry of streamers, favorites and stream constructors.

A `StreamerRegistry` holds four associated tables:

* format id -> handlers, in registration order (each handler at most once);
* format id -> favorite handler (per-format preference);
* globally preferred handlers, used to break ties for any format;
* ``(handler, format id)`` -> constructor, the function that actually opens
  a stream for that pair.

`resolve` picks the handler for a format: the per-format favorite if any,
otherwise the only registered handler, otherwise the only registered handler
that is also a global favorite. Anything else is an error.

Typical usage:
    ```python
    from formatstreams.registry import FormatHandler, streamer

    MYIO = FormatHandler("myio")

    @streamer(MYIO, "trajectory/x-xtc")
    def open_xtc(handler, format_id, io, *args, **kwargs):
        return XtcStream(io, *args, **kwargs)
    ```

Warning:
    Registries are not synchronized. Mutations are expected to happen while
    the process initializes (imports, plugin loading) before concurrent
    resolution begins. Tests should isolate mutations with `scoped()` or use a
    fresh `StreamerRegistry`.
"""

from __future__ import annotations

from contextlib import contextmanager
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from formatstreams.config.logging import FormatStreamsLogger, get_logger
from formatstreams.errors import (
    AlreadyGlobalFavoriteError,
    AmbiguousHandlerError,
    DuplicateRegistrationError,
    MissingConstructorError,
    NoHandlerRegisteredError,
    UnregisteredHandlerPreferenceError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from formatstreams.handlers import FormatHandler
    from formatstreams.streams.base import FormattedStream

logger: FormatStreamsLogger = get_logger(__name__)

Constructor = Callable[..., "FormattedStream[Any]"]
C = TypeVar("C", bound=Constructor)


class StreamerRegistry:
    """Catalog of streamers per format, with preference resolution."""

    def __init__(self) -> None:
        self._streamers: dict[str, list[FormatHandler]] = {}
        self._favorites: dict[str, FormatHandler] = {}
        self._global_favorites: list[FormatHandler] = []
        self._constructors: dict[tuple[FormatHandler, str], Constructor] = {}
        self._plugins: set[str] = set()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(formats={len(self._streamers)}, "
            f"favorites={len(self._favorites)}, "
            f"global_favorites={len(self._global_favorites)})"
        )

    def __contains__(self, format_id: object) -> bool:
        return bool(self._streamers.get(format_id)) if isinstance(format_id, str) else False

    # --- Mutation ---

    def register(self, format_id: str, handler: FormatHandler) -> None:
        """Register *handler* as a streamer for *format_id*.

        Registering a second handler for the same format is allowed and only
        logged; resolution then needs a favorite to pick one.

        Raises:
            DuplicateRegistrationError: If *handler* is already registered for
                *format_id*. The handler list is left unchanged.
        """
        streamers = self._streamers.setdefault(format_id, [])
        if handler in streamers:
            raise DuplicateRegistrationError(handler, format_id)
        streamers.append(handler)
        logger.debug("Registered streamer %s for %s", handler, format_id)
        if len(streamers) > 1:
            logger.info("%s has multiple registered streamers", format_id)

    def unregister(self, format_id: str, handler: FormatHandler) -> bool:
        """Remove *handler* from *format_id*, with its favorite and constructor entries.

        Returns:
            bool: True if the handler was registered for the format, else False.
        """
        streamers = self._streamers.get(format_id)
        if not streamers or handler not in streamers:
            return False
        streamers.remove(handler)
        if not streamers:
            del self._streamers[format_id]
        if self._favorites.get(format_id) == handler:
            del self._favorites[format_id]
        self._constructors.pop((handler, format_id), None)
        return True

    def prefer(self, handler: FormatHandler, format_id: str | None = None) -> None:
        """Mark *handler* as preferred, for one format or globally.

        Without *format_id*, *handler* becomes a global favorite: it is used
        for every format it is registered for whenever that format has several
        streamers. With *format_id*, it becomes the favorite for that format
        and overrides global favorites. Replacing an existing per-format
        favorite only logs a warning.

        Raises:
            AlreadyGlobalFavoriteError: If *handler* is already globally preferred.
            UnregisteredHandlerPreferenceError: If *handler* is not registered
                for *format_id*.
        """
        if format_id is None:
            if handler in self._global_favorites:
                raise AlreadyGlobalFavoriteError(handler)
            self._global_favorites.append(handler)
            logger.debug("Streamer %s is now globally preferred", handler)
            return

        if handler not in self._streamers.get(format_id, ()):
            raise UnregisteredHandlerPreferenceError(handler, format_id)
        if format_id in self._favorites:
            logger.warning("replacing preferred streamer for %s", format_id)
        self._favorites[format_id] = handler

    def mark_plugin_loaded(self, name: str) -> None:
        """Record that the plugin entry point *name* registered into this registry."""
        self._plugins.add(name)

    def plugin_loaded(self, name: str) -> bool:
        """Return True if the plugin entry point *name* already registered here."""
        return name in self._plugins

    def bind(self, handler: FormatHandler, format_id: str, constructor: Constructor) -> None:
        """Bind the constructor used to open *format_id* streams with *handler*.

        Raises:
            DuplicateRegistrationError: If the pair already has a constructor.
        """
        key = (handler, format_id)
        if key in self._constructors:
            raise DuplicateRegistrationError(handler, format_id)
        self._constructors[key] = constructor

    # --- Resolution ---

    def resolve(self, format_id: str) -> FormatHandler:
        """Return the handler to use for *format_id*.

        Raises:
            NoHandlerRegisteredError: If no handler is registered for the format.
            AmbiguousHandlerError: If several handlers are registered and
                neither a per-format favorite nor exactly one global favorite
                picks one.
        """
        favorite = self._favorites.get(format_id)
        if favorite is not None:
            logger.trace("Using preferred streamer %s for %s", favorite, format_id)
            return favorite

        candidates = self._streamers.get(format_id, [])
        if not candidates:
            raise NoHandlerRegisteredError(format_id)
        if len(candidates) == 1:
            return candidates[0]

        preferred = [h for h in candidates if h in self._global_favorites]
        if len(preferred) == 1:
            logger.trace("Using globally preferred streamer %s for %s", preferred[0], format_id)
            return preferred[0]
        raise AmbiguousHandlerError(format_id, candidates)

    def constructor_for(self, handler: FormatHandler, format_id: str) -> Constructor:
        """Return the constructor bound to ``(handler, format_id)``.

        Raises:
            MissingConstructorError: If the pair has no constructor.
        """
        try:
            return self._constructors[(handler, format_id)]
        except KeyError:
            raise MissingConstructorError(handler, format_id) from None

    # --- Read-only views ---

    def formats(self) -> tuple[str, ...]:
        """Return all format ids with at least one registered streamer (sorted)."""
        return tuple(sorted(f for f, hs in self._streamers.items() if hs))

    def handlers_for(self, format_id: str) -> tuple[FormatHandler, ...]:
        """Return the handlers registered for *format_id*, in registration order."""
        return tuple(self._streamers.get(format_id, ()))

    def favorite_for(self, format_id: str) -> FormatHandler | None:
        """Return the per-format favorite for *format_id*, if any."""
        return self._favorites.get(format_id)

    def global_favorites(self) -> tuple[FormatHandler, ...]:
        """Return the globally preferred handlers."""
        return tuple(self._global_favorites)

    def handler_named(self, name: str) -> FormatHandler | None:
        """Return the registered handler called *name*, if any."""
        for handlers in self._streamers.values():
            for handler in handlers:
                if handler.name == name:
                    return handler
        return None

    def as_mapping(self) -> Mapping[str, tuple[FormatHandler, ...]]:
        """Return a read-only format id -> handlers mapping."""
        return MappingProxyType({f: tuple(hs) for f, hs in self._streamers.items() if hs})

    # --- Snapshots ---

    def copy(self) -> StreamerRegistry:
        """Return an independent copy of this registry."""
        other = StreamerRegistry()
        other.merge(self)
        return other

    def clear(self) -> None:
        """Remove all streamers, favorites, constructors and loaded plugin names."""
        self._streamers.clear()
        self._favorites.clear()
        self._global_favorites.clear()
        self._constructors.clear()
        self._plugins.clear()

    def merge(self, other: StreamerRegistry) -> None:
        """Merge *other* into this registry.

        Handler lists, favorites and constructors from *other* replace entries
        for the same keys; global favorites are added if not already present.
        """
        for format_id, handlers in other._streamers.items():
            self._streamers[format_id] = list(handlers)
        self._favorites.update(other._favorites)
        for handler in other._global_favorites:
            if handler not in self._global_favorites:
                self._global_favorites.append(handler)
        self._constructors.update(other._constructors)
        self._plugins.update(other._plugins)

    @contextmanager
    def scoped(self) -> Iterator[StreamerRegistry]:
        """Temporarily replace the registry contents with an empty set.

        The current state is snapshotted and cleared; whatever is registered
        inside the ``with`` block is discarded on exit and the snapshot is
        restored, whether the block completes or raises.

        Yields:
            StreamerRegistry: This registry, emptied.
        """
        snapshot = self.copy()
        self.clear()
        try:
            yield self
        finally:
            self.clear()
            self.merge(snapshot)


_default_registry = StreamerRegistry()
_builtins_loaded = False


def default_registry() -> StreamerRegistry:
    """Return the process-wide registry, registering built-in streamers on first use."""
    global _builtins_loaded
    if not _builtins_loaded:
        _builtins_loaded = True
        from formatstreams.streams import register_builtin_streamers

        register_builtin_streamers(_default_registry)
    return _default_registry


def new_registry(
    setup: Callable[[StreamerRegistry], Any],
    body: Callable[[StreamerRegistry], Any] | None = None,
    *,
    registry: StreamerRegistry | None = None,
) -> Any:
    """Run code against a temporarily emptied registry and restore it afterwards.

    *setup* receives the emptied registry and registers the temporary
    streamer set. *body*, if given, then runs against it and its return value
    is passed through; without *body* the return value of *setup* is.
    """
    reg = registry if registry is not None else default_registry()
    with reg.scoped():
        result = setup(reg)
        if body is not None:
            result = body(reg)
        return result


def streamer(
    handler: FormatHandler,
    format_id: str,
    *,
    registry: StreamerRegistry | None = None,
) -> Callable[[C], C]:
    """Decorator registering a constructor as the streamer *handler* uses for *format_id*.

    The handler is registered for the format and the decorated function is
    bound as the ``(handler, format_id)`` constructor. The constructor is
    called as ``constructor(handler, format_id, io, *args, **kwargs)``.

    Raises:
        DuplicateRegistrationError: If the handler is already registered for
            the format.
    """

    def decorator(func: C) -> C:
        reg = registry if registry is not None else default_registry()
        logger.debug("Registering constructor %s for %s / %s", func.__name__, handler, format_id)
        reg.register(format_id, handler)
        reg.bind(handler, format_id, func)
        return func

    return decorator


def add_streamer(format_id: str, handler: FormatHandler, constructor: Constructor) -> None:
    """Register *handler* for *format_id* in the default registry and bind its constructor."""
    reg = default_registry()
    reg.register(format_id, handler)
    reg.bind(handler, format_id, constructor)


def prefer_streamer(handler: FormatHandler, format_id: str | None = None) -> None:
    """Prefer *handler* in the default registry (see `StreamerRegistry.prefer`)."""
    default_registry().prefer(handler, format_id)


def resolve_streamer(format_id: str) -> FormatHandler:
    """Resolve the handler for *format_id* in the default registry."""
    return default_registry().resolve(format_id)
