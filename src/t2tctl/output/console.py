"""Rich theme and buffered consoles for rendering results to strings.

Renderers never print to the terminal directly: they draw on a console
backed by a StringIO and hand the text back, so the command layer decides
between stdout and stderr.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

# Styles are keyed by what the value means in a task, not by colour.
T2T_THEME = Theme(
    {
        "t2t.ok": "bold green",
        "t2t.error": "bold red",
        "t2t.warning": "bold yellow",
        "t2t.op": "bold cyan",
        "t2t.key": "dim",
        "t2t.id": "bold blue",
        "t2t.title": "bold",
        "t2t.date": "magenta",
        "t2t.modifier": "yellow",
        "t2t.changed": "bold yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Console drawing into a private buffer.

    Highlighting is off: titles and notes are user text, and Rich would
    otherwise colour numbers and paths inside them.
    """
    return Console(
        file=StringIO(),
        theme=T2T_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Everything drawn so far on a console from :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console does not render into a buffer"
        raise TypeError(msg)
    return buffer.getvalue()
