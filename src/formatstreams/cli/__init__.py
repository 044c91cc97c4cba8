# topmark:header:start
#
#   project      : FormatStreams
#   file         : __init__.py
#   file_relpath : src/formatstreams/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command line interface for FormatStreams (Click based)."""
