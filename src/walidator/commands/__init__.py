"""Subcommand modules for walidator.

Provides register_commands() which uses deferred imports to keep
``walidator --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from walidator.commands.check import check
    from walidator.commands.rules import rules
    from walidator.commands.validate import validate

    cli.add_command(check)
    cli.add_command(rules)
    cli.add_command(validate)
