"""Root CLI group for zuora with global flags and command registration."""

from __future__ import annotations

from typing import Any

import click

from zuora import __version__
from zuora.commands import register_commands
from zuora.commands._base import ZuoraGroup
from zuora.commands._context import AppContext
from zuora.config.settings import ZuoraSettings
from zuora.domain.errors import ConfigError


@click.group(cls=ZuoraGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="zuora")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing details.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--sandbox", is_flag=True, help="Use the sandbox endpoint.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    sandbox: bool,
    config_path: str | None,
) -> None:
    """zuora: Zuora SOAP API diagnostic utility."""
    options: dict[str, Any] = {
        "json_output": json_output,
        "verbose": verbose,
        "log_json": log_json,
    }
    if sandbox:
        options["sandbox"] = True
    if verbose:
        options["log"] = True
    try:
        settings = ZuoraSettings.from_options(config_path=config_path, **options)
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
