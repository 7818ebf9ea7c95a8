"""Command: evaluate one rule against one value."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from walidator.commands._base import WalCommand
from walidator.config.logging import bind_command

if TYPE_CHECKING:
    from walidator.commands._context import AppContext

_COERCIONS = ("str", "int", "float", "null")


def coerce_value(raw: str, as_type: str) -> Any:
    """Turn the command-line *raw* text into the value handed to the rule."""
    if as_type == "null":
        return None
    if as_type == "int":
        try:
            return int(raw)
        except ValueError as exc:
            msg = f"{raw!r} is not an integer"
            raise click.BadParameter(msg, param_hint="VALUE") from exc
    if as_type == "float":
        try:
            return float(raw)
        except ValueError as exc:
            msg = f"{raw!r} is not a number"
            raise click.BadParameter(msg, param_hint="VALUE") from exc
    return raw


@click.command(
    cls=WalCommand,
    examples="""\
  walidator check latitude 45.0
  walidator check longitude 181 --as float
  walidator check uuid 550e8400-e29b-41d4-a716-446655440000
  walidator check min 3 --param 1 --as int
  walidator check required "" --as null""",
)
@click.argument("rule")
@click.argument("value", required=False, default="")
@click.option("-p", "--param", default="", help="Rule parameter (e.g. the bound for min).")
@click.option(
    "--as",
    "as_type",
    type=click.Choice(_COERCIONS),
    default="str",
    show_default=True,
    help="Type to convert VALUE to before checking; null ignores VALUE.",
)
@click.pass_obj
def check(app: AppContext, rule: str, value: str, param: str, as_type: str) -> None:
    """Check VALUE against a single RULE."""
    bind_command("check", rule=rule, param=param)
    app.emit(app.service.check(rule, coerce_value(value, as_type), param))
