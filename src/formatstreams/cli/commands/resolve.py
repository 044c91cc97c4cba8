# topmark:header:start
#
#   project      : FormatStreams
#   file         : resolve.py
#   file_relpath : src/formatstreams/cli/commands/resolve.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI command to show which streamer a format resolves to."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from formatstreams.cli.errors import cli_error_from
from formatstreams.errors import FormatStreamsError
from formatstreams.registry import default_registry

if TYPE_CHECKING:
    from formatstreams.cli.console import ConsoleLike


@click.command(
    name="resolve",
    help="Show the streamer selected for FORMAT_ID.",
)
@click.argument("format_id")
def resolve_command(format_id: str) -> None:
    """Print the streamer that resolution selects for a format.

    Args:
        format_id (str): Format identifier (e.g. ``application/jsonl``).

    Raises:
        UnavailableCliError: If no streamer is registered or the choice is ambiguous.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    registry = default_registry()
    try:
        handler = registry.resolve(format_id)
    except FormatStreamsError as exc:
        raise cli_error_from(exc) from exc

    console.print(handler.name)
    if vlevel > 0:
        candidates = ", ".join(h.name for h in registry.handlers_for(format_id))
        console.print(f"candidates: {candidates}")
        if handler.description:
            console.print(f"description: {handler.description}")
