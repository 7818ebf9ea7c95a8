"""Command: validate fields of a JSON document."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from walidator.commands._base import WalCommand
from walidator.config.logging import bind_command

if TYPE_CHECKING:
    from walidator.commands._context import AppContext


def parse_rule_options(values: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated ``FIELD=TAGS`` options into a path -> tags mapping."""
    rules: dict[str, str] = {}
    for item in values:
        path, sep, tags = item.partition("=")
        if not sep or not path.strip() or not tags.strip():
            msg = f"Expected FIELD=TAGS, got {item!r}"
            raise click.BadParameter(msg, param_hint="--rule")
        rules[path.strip()] = tags.strip()
    return rules


@click.command(
    cls=WalCommand,
    examples="""\
  walidator validate place.json --rule lat=required,latitude --rule lng=required,longitude
  walidator validate order.json --rule id=required,uuid --rule origin.lat=latitude
  walidator validate order.json   # rules from [fields] in walidator.toml""",
)
@click.argument("document", type=click.Path(path_type=Path))
@click.option(
    "-r",
    "--rule",
    "rule_options",
    multiple=True,
    metavar="FIELD=TAGS",
    help="Rules for a dotted field path. Repeatable; overrides [fields] config.",
)
@click.pass_obj
def validate(app: AppContext, document: Path, rule_options: tuple[str, ...]) -> None:
    """Validate fields of a JSON DOCUMENT."""
    bind_command("validate", document=str(document))
    app.emit(app.service.validate_document(document, parse_rule_options(rule_options)))
