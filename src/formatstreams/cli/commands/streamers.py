# topmark:header:start
#
#   project      : FormatStreams
#   file         : streamers.py
#   file_relpath : src/formatstreams/cli/commands/streamers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI command to list registered streamers.

Shows, per format, the registered streamers in registration order, which one
is preferred, and which one resolution selects (or why it fails).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from formatstreams.cli.options import OutputFormat, output_format_option
from formatstreams.registry import default_registry, iter_bindings

if TYPE_CHECKING:
    from formatstreams.cli.console import ConsoleLike
    from formatstreams.registry import Binding


@click.command(
    name="streamers",
    help="List registered streamers per format.",
)
@output_format_option
def streamers_command(*, output_format: str) -> None:
    """List registered streamers per format.

    Args:
        output_format (str): Output format (``default``, ``json`` or ``ndjson``).
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    registry = default_registry()
    bindings: list[Binding] = list(iter_bindings(registry))
    global_favorites: list[str] = [h.name for h in registry.global_favorites()]
    fmt = OutputFormat(output_format.lower())

    if fmt == OutputFormat.JSON:
        payload: dict[str, Any] = {
            "formats": [b.to_dict() for b in bindings],
            "global_favorites": global_favorites,
        }
        console.print(json.dumps(payload, indent=2))
        return

    if fmt == OutputFormat.NDJSON:
        for b in bindings:
            console.print(json.dumps(b.to_dict()))
        return

    if not bindings:
        console.print("No streamers registered.")
        return

    for b in bindings:
        console.print(console.styled(b.format_id, bold=True))
        for name in b.handlers:
            marks: list[str] = []
            if name == b.favorite:
                marks.append("preferred")
            if name in global_favorites:
                marks.append("globally preferred")
            if name == b.resolved and len(b.handlers) > 1:
                marks.append("selected")
            suffix = f" ({', '.join(marks)})" if marks else ""
            console.print(f"    {name}{suffix}")
        if b.error is not None and vlevel >= 0:
            console.print(console.styled(f"    ! {b.error}", fg="yellow"))
