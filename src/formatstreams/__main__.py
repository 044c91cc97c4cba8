# topmark:header:start
#
#   project      : FormatStreams
#   file         : __main__.py
#   file_relpath : src/formatstreams/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running FormatStreams via ``python -m formatstreams``.

Delegates to `formatstreams.cli.main.cli`, the same entry point as the
``formatstreams`` console script.
"""

from __future__ import annotations

from formatstreams.cli.main import cli

if __name__ == "__main__":
    cli()
