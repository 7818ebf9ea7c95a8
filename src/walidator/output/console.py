"""Rich console and theme for walidator's human-readable output.

Formatters print into a console that writes to memory and hand back the
captured text, so the command decides whether it goes to stdout or stderr.
Rule errors are styled by kind: violations of the data in one colour,
rules that could not be applied in another.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from walidator.domain.errors import ErrorKind

WALIDATOR_THEME = Theme(
    {
        "wal.ok": "bold green",
        "wal.error": "bold red",
        "wal.warning": "bold yellow",
        "wal.op": "bold cyan",
        "wal.key": "dim",
        "wal.rule": "bold blue",
        "wal.path": "bold",
        "wal.violation": "red",
        "wal.usage": "magenta",
    }
)

DEFAULT_WIDTH = 100


def kind_style(kind: str) -> str:
    """Theme style for an :class:`ErrorKind` value (``"required"``, ``"unsupported"``, ...)."""
    try:
        return "wal.violation" if ErrorKind(kind).is_violation else "wal.usage"
    except ValueError:
        return "wal.usage"


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Console writing into memory. Emoji codes such as ``:x:`` print literally."""
    return Console(
        file=StringIO(),
        theme=WALIDATOR_THEME,
        no_color=no_color,
        highlight=False,
        emoji=False,
        width=width or DEFAULT_WIDTH,
    )


def rendered_text(console: Console) -> str:
    """Everything printed to *console* so far, without the trailing newline."""
    if not isinstance(console.file, StringIO):
        msg = "console was not created by create_console()"
        raise TypeError(msg)
    return console.file.getvalue().rstrip("\n")
