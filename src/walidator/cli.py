"""``walidator`` command line: global flags shared by check, rules and validate."""

from __future__ import annotations

from typing import Any

import click

from walidator import __version__
from walidator.commands import register_commands
from walidator.commands._context import AppContext
from walidator.config.settings import WalidatorSettings


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="walidator")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the OK/ERROR line.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs (registry assembly, rule calls).")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option("--no-plugins", is_flag=True, help="Use only built-in and configured pattern rules.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="walidator.toml to use instead of searching upwards from the current directory.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, no_plugins: bool, **flags: Any) -> None:
    """Validate values and JSON documents with tag rules such as ``required,latitude``."""
    if no_plugins:
        flags["plugins"] = {"enabled": False}
    ctx.obj = AppContext(WalidatorSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
