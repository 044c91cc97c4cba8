# topmark:header:start
#
#   project      : FormatStreams
#   file         : main.py
#   file_relpath : src/formatstreams/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatStreams command line interface.

Group-level options are resolved once and placed into ``ctx.obj``:
program-output verbosity, the console, and the configuration, which is
discovered (or read from ``--config``) and applied to the default registry
before any subcommand runs.
"""

from __future__ import annotations

from pathlib import Path

import click

from formatstreams.cli.commands.dump import dump_command
from formatstreams.cli.commands.resolve import resolve_command
from formatstreams.cli.commands.streamers import streamers_command
from formatstreams.cli.commands.version import version_command
from formatstreams.cli.console import ClickConsole
from formatstreams.cli.errors import cli_error_from
from formatstreams.cli.options import common_verbose_options, resolve_verbosity
from formatstreams.config import Config, apply_config, discover_config, load_config
from formatstreams.config.logging import get_logger, resolve_env_log_level, setup_logging
from formatstreams.errors import ConfigError

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """Initialize shared state (verbosity, console, configuration) on the Click context.

    Args:
        ctx (click.Context): Current Click context; ``obj`` is populated.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
        config_path (Path | None): Explicit configuration file, if any.

    Raises:
        ConfigCliError: If the configuration cannot be read or applied.
    """
    ctx.obj = ctx.obj or {}
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Diagnostics level comes from the environment only; color follows --no-color.
    setup_logging(level=resolve_env_log_level(), color=not no_color)

    ctx.obj["console"] = ClickConsole(enable_color=not no_color)

    try:
        config: Config = load_config(config_path) if config_path else discover_config()
        apply_config(config)
    except ConfigError as exc:
        raise cli_error_from(exc) from exc
    ctx.obj["config"] = config


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Read and inspect streams of formatted values.",
)
@common_verbose_options
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: nearest formatstreams.toml or pyproject.toml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """Entry point for the FormatStreams CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        config_path=config_path,
    )
    if ctx.invoked_subcommand is None:
        ctx.obj["console"].print(
            "Hint: use 'formatstreams streamers' to list registered streamers."
        )


cli.add_command(streamers_command)
cli.add_command(resolve_command)
cli.add_command(dump_command)
cli.add_command(version_command)
