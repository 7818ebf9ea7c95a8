"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich styles) or machines
(--json). Human output goes through a StringIO-backed console so every
formatter returns a plain string.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from walidator.output.console import create_console, kind_style, rendered_text

if TYPE_CHECKING:
    from walidator.services.result import ServiceResult


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _rules_table(rules: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="wal.key", box=None)
    table.add_column("Rule", style="wal.rule")
    table.add_column("Builtin")
    table.add_column("Description")
    for rule in rules:
        table.add_row(
            escape(rule["name"]),
            "yes" if rule.get("builtin") else "no",
            escape(rule.get("description", "")),
        )
    return table


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
    no_color: bool = True,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        quiet: Human mode only — print just the status line.
        no_color: Disable ANSI styles in human mode.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=no_color)
    if result.ok:
        console.print(f"[wal.ok]OK[/]: [wal.op]{escape(result.op)}[/]")
        if not quiet:
            data = dict(result.data)
            rules = data.pop("rules", None)
            for key, value in data.items():
                console.print(f"  [wal.key]{escape(key)}[/]: {escape(_format_value(value))}")
            if rules:
                console.print(_rules_table(rules))
        return rendered_text(console)

    error = result.error
    message = error.message if error else "Unknown error"
    console.print(f"[wal.error]ERROR[/]: [wal.op]{escape(result.op)}[/] - {escape(message)}")
    if error and not quiet:
        for path, errors in result.failed_fields.items():
            for item in errors:
                style = kind_style(item["kind"])
                console.print(
                    f"  [wal.path]{escape(path)}[/]: {escape(item['message'])} "
                    f"[{style}]({escape(item['kind'])})[/]"
                )
    return rendered_text(console)
