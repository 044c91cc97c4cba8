# topmark:header:start
#
#   project      : FormatStreams
#   file         : plugins.py
#   file_relpath : src/formatstreams/registry/plugins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Discovery of third-party streamers through entry points.

Plugins advertise a ``register(registry)`` callable in the
``formatstreams.streamers`` entry point group:

```toml
[project.entry-points."formatstreams.streamers"]
xtc = "mdstreams.xtc:register"
```

A plugin that fails to load or to register is logged and skipped; the other
plugins are still loaded. Each entry point registers at most once per
registry, so loading again (e.g. re-applying configuration) is harmless.
"""

from __future__ import annotations

from importlib.metadata import EntryPoints, entry_points
from typing import TYPE_CHECKING, Any

from formatstreams.config.logging import FormatStreamsLogger, get_logger
from formatstreams.constants import PLUGIN_ENTRYPOINT_GROUP

if TYPE_CHECKING:
    from .streamers import StreamerRegistry

logger: FormatStreamsLogger = get_logger(__name__)


def load_plugins(
    registry: StreamerRegistry | None = None,
    *,
    group: str = PLUGIN_ENTRYPOINT_GROUP,
) -> list[str]:
    """Load streamer plugins from entry points into *registry*.

    Args:
        registry (StreamerRegistry | None): Target registry; defaults to the
            process-wide registry.
        group (str): Entry point group to scan.

    Returns:
        list[str]: Names of the entry points that registered successfully in
            this call (already loaded ones are skipped).
    """
    from .streamers import default_registry

    reg = registry if registry is not None else default_registry()
    try:
        candidates: EntryPoints = entry_points().select(group=group)
    except Exception:
        logger.exception("Failed to read entry points")
        return []

    loaded: list[str] = []
    for ep in candidates:
        if reg.plugin_loaded(ep.name):
            logger.debug("Streamer plugin %s already loaded; skipping", ep.name)
            continue
        try:
            hook: Any = ep.load()
            if not callable(hook):
                logger.warning("Entry point %s is not callable: %r", ep.name, hook)
                continue
            hook(reg)
        except Exception:
            logger.exception("Failed loading streamers from entry point %s", ep.name)
            continue
        logger.debug("Loaded streamer plugin %s", ep.name)
        reg.mark_plugin_loaded(ep.name)
        loaded.append(ep.name)
    return loaded
