# topmark:header:start
#
#   project      : FormatStreams
#   file         : __init__.py
#   file_relpath : src/formatstreams/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration and logging for FormatStreams.

Settings are read from ``formatstreams.toml`` or ``[tool.formatstreams]`` in
``pyproject.toml`` and applied to a streamer registry:

```python
from formatstreams.config import apply_config, discover_config

apply_config(discover_config())
```
"""

from __future__ import annotations

from .loaders import apply_config, discover_config, load_config, load_toml_dict
from .model import Config

__all__ = [
    "Config",
    "apply_config",
    "discover_config",
    "load_config",
    "load_toml_dict",
]
