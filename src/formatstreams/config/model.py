# topmark:header:start
#
#   project      : FormatStreams
#   file         : model.py
#   file_relpath : src/formatstreams/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable FormatStreams configuration.

`Config` captures the user-tunable parts of resolution: which streamer to
prefer per format or globally, extra filename suffixes for the default
classifier, and whether entry point plugins are loaded. Values reference
streamers by name so that they can live in TOML files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, cast

from formatstreams.config.logging import FormatStreamsLogger, get_logger
from formatstreams.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger: FormatStreamsLogger = get_logger(__name__)

_KNOWN_KEYS = frozenset(
    {"load_plugins", "favorites", "global_favorites", "suffixes", "coding_suffixes"}
)


def _str_table(data: Mapping[str, Any], key: str) -> Mapping[str, str]:
    value: Any = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a table of strings")
    table = cast("dict[Any, Any]", value)
    for k, v in table.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise ConfigError(f"'{key}' must map strings to strings (got {k!r} = {v!r})")
    return MappingProxyType(dict(table))


def _str_list(data: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value: Any = data.get(key, [])
    if not isinstance(value, list) or not all(
        isinstance(v, str) for v in cast("list[Any]", value)
    ):
        raise ConfigError(f"'{key}' must be a list of strings")
    return tuple(cast("list[str]", value))


@dataclass(frozen=True)
class Config:
    """Resolution settings.

    Attributes:
        load_plugins (bool): Load streamers advertised through entry points.
        favorites (Mapping[str, str]): Format id -> preferred streamer name.
        global_favorites (tuple[str, ...]): Names of globally preferred streamers.
        suffixes (Mapping[str, str]): Extra filename suffix -> format id rules.
        coding_suffixes (Mapping[str, str]): Extra filename suffix -> coding id rules.
        source (Path | None): File the settings were read from, if any.
    """

    load_plugins: bool = True
    favorites: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    global_favorites: tuple[str, ...] = ()
    suffixes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    coding_suffixes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    source: Path | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: Path | None = None) -> Config:
        """Build a `Config` from a parsed TOML table.

        Unknown keys are logged and ignored.

        Raises:
            ConfigError: If a known key has a value of the wrong type.
        """
        for key in data:
            if key not in _KNOWN_KEYS:
                logger.warning("Ignoring unknown configuration key '%s' in %s", key, source)

        load_plugins: Any = data.get("load_plugins", True)
        if not isinstance(load_plugins, bool):
            raise ConfigError("'load_plugins' must be a boolean")

        return cls(
            load_plugins=load_plugins,
            favorites=_str_table(data, "favorites"),
            global_favorites=_str_list(data, "global_favorites"),
            suffixes=_str_table(data, "suffixes"),
            coding_suffixes=_str_table(data, "coding_suffixes"),
            source=source,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a TOML-serializable representation (without `source`)."""
        return {
            "load_plugins": self.load_plugins,
            "global_favorites": list(self.global_favorites),
            "favorites": dict(self.favorites),
            "suffixes": dict(self.suffixes),
            "coding_suffixes": dict(self.coding_suffixes),
        }
