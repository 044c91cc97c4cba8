# topmark:header:start
#
#   project      : FormatStreams
#   file         : __init__.py
#   file_relpath : src/formatstreams/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatStreams CLI subcommands."""
