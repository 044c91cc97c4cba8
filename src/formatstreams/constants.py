# topmark:header:start
#
#   project      : FormatStreams
#   file         : constants.py
#   file_relpath : src/formatstreams/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatStreams Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    FORMATSTREAMS_VERSION: str = get_version("formatstreams")
except PackageNotFoundError:  # running from a source checkout
    FORMATSTREAMS_VERSION = "0.0.0"

# Entry point group scanned by `formatstreams.registry.plugins.load_plugins`.
PLUGIN_ENTRYPOINT_GROUP: str = "formatstreams.streamers"

# Config file names, in lookup order.
CONFIG_FILE_NAME: str = "formatstreams.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_TABLE: str = "formatstreams"

# Media-type style identifiers used by the bundled collaborators.
JSONLINES_FORMAT: str = "application/jsonl"
GZIP_CODING: str = "application/gzip"
BZIP2_CODING: str = "application/x-bzip2"
XZ_CODING: str = "application/x-xz"
