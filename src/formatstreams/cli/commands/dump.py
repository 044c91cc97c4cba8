# topmark:header:start
#
#   project      : FormatStreams
#   file         : dump.py
#   file_relpath : src/formatstreams/cli/commands/dump.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI command to print the values of a formatted resource.

The format and coding are inferred from the file name unless given with
``--format-id`` / ``--coding``.
"""

from __future__ import annotations

import json
from itertools import islice
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from formatstreams.cli.errors import UsageCliError, cli_error_from
from formatstreams.cli.options import OutputFormat, output_format_option
from formatstreams.errors import FormatStreamsError
from formatstreams.formats import specify
from formatstreams.iteration import eachval
from formatstreams.resolution import streamf

if TYPE_CHECKING:
    from formatstreams.cli.console import ConsoleLike


@click.command(
    name="dump",
    help="Print the values stored in PATH.",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--format-id", default=None, help="Format identifier (skips inference).")
@click.option("--coding", default=None, help="Coding identifier (requires --format-id).")
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=None,
    help="Print at most this many values.",
)
@output_format_option
def dump_command(
    path: Path,
    *,
    format_id: str | None,
    coding: str | None,
    limit: int | None,
    output_format: str,
) -> None:
    """Print the values stored in a formatted resource.

    Args:
        path (Path): File to read.
        format_id (str | None): Explicit format identifier.
        coding (str | None): Explicit coding identifier.
        limit (int | None): Maximum number of values to print.
        output_format (str): ``default`` prints ``repr`` lines; ``json`` one
            array; ``ndjson`` one JSON value per line.

    Raises:
        UsageCliError: If ``--coding`` is given without ``--format-id``.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    fmt = OutputFormat(output_format.lower())

    if coding is not None and format_id is None:
        raise UsageCliError("'--coding' requires '--format-id'.")

    resource: Any = specify(path, format_id, coding) if format_id else path
    values: list[Any] = []
    try:
        with streamf(resource) as stream:
            for value in islice(eachval(stream), limit):
                if fmt == OutputFormat.JSON:
                    values.append(value)
                elif fmt == OutputFormat.NDJSON:
                    console.print(json.dumps(value, default=str))
                else:
                    console.print(repr(value))
    except (FormatStreamsError, OSError, ValueError) as exc:
        raise cli_error_from(exc) from exc

    if fmt == OutputFormat.JSON:
        console.print(json.dumps(values, indent=2, default=str))
