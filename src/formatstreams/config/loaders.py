# topmark:header:start
#
#   project      : FormatStreams
#   file         : loaders.py
#   file_relpath : src/formatstreams/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and apply TOML configuration.

Configuration is read from ``formatstreams.toml`` or from the
``[tool.formatstreams]`` table of ``pyproject.toml``. Parsing is done with
`tomlkit` and the result is converted into a frozen `Config`.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from formatstreams.config.logging import FormatStreamsLogger, get_logger
from formatstreams.config.model import Config
from formatstreams.constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME, PYPROJECT_TOOL_TABLE
from formatstreams.errors import ConfigError, RegistryError

if TYPE_CHECKING:
    from formatstreams.formats import SuffixClassifier
    from formatstreams.registry.streamers import StreamerRegistry

logger: FormatStreamsLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file from the filesystem.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        raise ConfigError(f"Error loading TOML from {path}: {e}") from e
    except TomlkitParseError as e:
        raise ConfigError(f"Error decoding TOML from {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("dict[str, Any]", data_any) if isinstance(data_any, dict) else {}


def _tool_table(data: dict[str, Any]) -> dict[str, Any] | None:
    tool: Any = data.get("tool")
    if not isinstance(tool, dict):
        return None
    table: Any = cast("dict[str, Any]", tool).get(PYPROJECT_TOOL_TABLE)
    return cast("dict[str, Any]", table) if isinstance(table, dict) else None


def load_config(path: Path) -> Config:
    """Read a `Config` from *path*.

    ``pyproject.toml`` files contribute their ``[tool.formatstreams]`` table
    (defaults if absent); any other file is read as a whole.
    """
    data = load_toml_dict(path)
    if path.name == PYPROJECT_FILE_NAME:
        data = _tool_table(data) or {}
    logger.debug("Loaded configuration from %s", path)
    return Config.from_dict(data, source=path)


def discover_config(start: Path | None = None) -> Config:
    """Find the nearest configuration file from *start* (default: CWD) upwards.

    In each directory ``formatstreams.toml`` wins over ``pyproject.toml``;
    a ``pyproject.toml`` without a ``[tool.formatstreams]`` table is skipped.
    Returns default settings when nothing is found.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return load_config(candidate)
        pyproject = directory / PYPROJECT_FILE_NAME
        if pyproject.is_file() and _tool_table(load_toml_dict(pyproject)) is not None:
            return load_config(pyproject)
    logger.trace("No configuration found from %s; using defaults", current)
    return Config()


def apply_config(
    config: Config,
    *,
    registry: StreamerRegistry | None = None,
    classifier: SuffixClassifier | None = None,
) -> None:
    """Install *config* into a registry and classifier.

    Suffix rules are added to the classifier, plugins are loaded when enabled,
    then global and per-format favorites are applied by streamer name.
    Applying the same configuration twice is harmless.

    Raises:
        ConfigError: If a favorite names an unknown streamer, or a streamer not
            registered for the format it is preferred for.
    """
    from formatstreams.formats import default_classifier
    from formatstreams.registry.plugins import load_plugins
    from formatstreams.registry.streamers import default_registry

    reg = registry if registry is not None else default_registry()
    cls = classifier if classifier is not None else default_classifier()

    for suffix, format_id in config.suffixes.items():
        cls.register_suffix(suffix, format_id)
    for suffix, coding_id in config.coding_suffixes.items():
        cls.register_coding_suffix(suffix, coding_id)

    if config.load_plugins:
        load_plugins(reg)

    for name in config.global_favorites:
        handler = reg.handler_named(name)
        if handler is None:
            raise ConfigError(f"Unknown streamer in global_favorites: {name}")
        if handler not in reg.global_favorites():
            reg.prefer(handler)

    for format_id, name in config.favorites.items():
        handler = reg.handler_named(name)
        if handler is None:
            raise ConfigError(f"Unknown streamer preferred for {format_id}: {name}")
        if reg.favorite_for(format_id) == handler:
            continue
        try:
            reg.prefer(handler, format_id)
        except RegistryError as e:
            raise ConfigError(str(e)) from e
