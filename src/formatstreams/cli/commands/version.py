# topmark:header:start
#
#   project      : FormatStreams
#   file         : version.py
#   file_relpath : src/formatstreams/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatStreams `version` command."""

from __future__ import annotations

import json

import click

from formatstreams.cli.options import OutputFormat, output_format_option
from formatstreams.constants import FORMATSTREAMS_VERSION


@click.command(
    name="version",
    help="Show the current version of FormatStreams.",
)
@output_format_option
def version_command(*, output_format: str) -> None:
    """Show the installed FormatStreams version."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console = ctx.obj["console"]

    if OutputFormat(output_format.lower()) in (OutputFormat.JSON, OutputFormat.NDJSON):
        console.print(json.dumps({"version": FORMATSTREAMS_VERSION}))
    else:
        console.print(console.styled(FORMATSTREAMS_VERSION, bold=True))
