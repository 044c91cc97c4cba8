# topmark:header:start
#
#   project      : FormatStreams
#   file         : options.py
#   file_relpath : src/formatstreams/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

Reusable options (verbosity, output format) and their resolution logic, so
commands and the group stay thin.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from formatstreams.cli.errors import UsageCliError

P = ParamSpec("P")
R = TypeVar("R")


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output.
      JSON: A single JSON document.
      NDJSON: One JSON object per line.
    """

    DEFAULT = "default"
    JSON = "json"
    NDJSON = "ndjson"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from ``-v``/``-q`` counts.

    Returns:
        int: ``verbose_count`` if positive, ``-1`` when quiet, else ``0``.

    Raises:
        UsageCliError: If both flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise UsageCliError(
            "The '--verbose' and '--quiet' options are mutually exclusive."
        )
    if quiet_count > 0:
        return -1
    return verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add -v/--verbose and -q/--quiet counting options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress non-essential output.",
    )(f)
    return f


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add an ``--output-format`` option (see `OutputFormat`)."""
    return click.option(
        "--output-format",
        "output_format",
        type=click.Choice([v.value for v in OutputFormat], case_sensitive=False),
        default=OutputFormat.DEFAULT.value,
        show_default=True,
        help="Output format.",
    )(f)
