"""Command: list registered rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from walidator.commands._base import WalCommand
from walidator.config.logging import bind_command

if TYPE_CHECKING:
    from walidator.commands._context import AppContext


@click.command(
    cls=WalCommand,
    examples="""\
  walidator rules
  walidator --json rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List every rule available to tags (built-ins, patterns, plugins)."""
    bind_command("rules")
    app.emit(app.service.list_rules())
