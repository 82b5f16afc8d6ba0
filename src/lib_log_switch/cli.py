"""Command-line interface for inspecting and exercising the facility.

Purpose
-------
Give operators a quick way to see which levels and mechanisms exist and to
send a test message through a chosen mechanism.

Contents
--------
* :func:`cli` - click group with ``--version`` and ``--use-dotenv``.
* Commands ``info``, ``levels``, ``mechanisms`` and ``emit``.
* :func:`main` - run the group and return an exit code.

System Role
-----------
Presentation layer only: every command goes through the public functions of
:mod:`lib_log_switch`, so the CLI observes the same environment overrides as
library callers.
"""

from __future__ import annotations

import os
from typing import Sequence

import click

from . import __init__conf__
from . import config as config_module
from . import runtime
from .domain.levels import level_names

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def summary_info() -> str:
    """Return the metadata banner printed by ``info``.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load environment variables from a nearby .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool) -> None:
    """Inspect levels and mechanisms or emit a test message."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        ctx.invoke(info_command)


@cli.command("info", context_settings=CONTEXT_SETTINGS)
def info_command() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("levels", context_settings=CONTEXT_SETTINGS)
def levels_command() -> None:
    """Print every loglevel name, noisiest first."""

    runtime.print_levels()


@cli.command("mechanisms", context_settings=CONTEXT_SETTINGS)
def mechanisms_command() -> None:
    """Print every available logging mechanism."""

    runtime.print_mechanisms()


@cli.command("emit", context_settings=CONTEXT_SETTINGS)
@click.option(
    "--level",
    "level_name",
    type=click.Choice(level_names()),
    default="info",
    show_default=True,
    help="Level of the emitted message.",
)
@click.option(
    "--threshold",
    type=click.Choice(level_names()),
    default=None,
    help="Set the facility's loglevel before emitting.",
)
@click.option("--mechanism", default=None, help='Mechanism to switch to first ("list" prints them).')
@click.argument("message")
def emit_command(level_name: str, threshold: str | None, mechanism: str | None, message: str) -> None:
    """Send MESSAGE through the facility."""

    if threshold is not None:
        runtime.set_level(threshold)
    if mechanism is not None and not runtime.set_mechanism(mechanism):
        raise click.ClickException(f"could not switch to logging mechanism {mechanism!r}")
    result = runtime.emit(level_name, message)
    if not result.get("ok") and result.get("reason") != "suppressed":
        raise click.ClickException(f"message was not delivered ({result.get('reason')})")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the click group in a test-friendly manner.

    Parameters
    ----------
    argv:
        Optional sequence of argument strings (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Zero on success, the click exit code otherwise.

    Examples
    --------
    >>> main(["--version"])  # doctest: +ELLIPSIS
    0...
    0
    """

    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0


__all__ = ["cli", "main", "summary_info"]
