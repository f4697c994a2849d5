"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from t2tctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from t2tctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict))

    # Single-value ops print just the value so the output pipes cleanly.
    for key in ("date", "description"):
        value = result.data.get(key)
        if value is not None:
            return str(value)
    task = result.data.get("task")
    if isinstance(task, dict):
        return str(task.get("title", ""))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="t2t.ok")
    op = Text(f"  {result.op}", style="t2t.op")
    console.print(Text.assemble(label, op))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="t2t.key")
    if value is None:
        v = Text("-", style="dim")
    elif key == "id":
        v = Text(str(value), style="t2t.id")
    elif key in ("title", "description"):
        v = Text(str(value), style="t2t.title")
    elif key in ("date", "due", "start", "due_date", "start_date"):
        v = Text(str(value), style="t2t.date")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="t2t.error")
    op = Text(f"  {result.op}", style="t2t.op")
    console.print(Text.assemble(label, op, ": ", msg))

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        if err.detail:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(Text(f"    {k}: {v}"))


# ── Title grammar renderers ───────────────────────────────────────────


def _render_tokens(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render tokenize results: description, date tokens, modifier list."""
    _status_line(console, result)
    d = result.data
    if verbose:
        _field(console, "title", d.get("title"))
    for key in ("description", "due_date", "start_date", "repeat"):
        _field(console, key, d.get(key))

    modifiers = d.get("modifiers", [])
    if modifiers:
        styled = Text("  modifiers: ", style="t2t.key")
        for index, modifier in enumerate(modifiers):
            if index:
                styled.append(" ")
            styled.append(f"/{modifier}", style="t2t.modifier")
        console.print(styled)
    else:
        _field(console, "modifiers", None)


def _render_date(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render resolve_date and pseudo_date results."""
    _status_line(console, result)
    d = result.data
    for key in ("text", "status", "context"):
        if key in d:
            _field(console, key, d[key])
    _field(console, "date", d.get("date"))
    if verbose:
        _field(console, "timestamp", d.get("timestamp"))


# ── Normalization renderers ───────────────────────────────────────────


def _render_normalize(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render one normalized task."""
    _status_line(console, result)
    d = result.data
    task = d.get("task", {})
    if d.get("changed"):
        console.print("  [t2t.changed]CHANGED[/t2t.changed]")

    for key in ("title", "status", "priority", "due", "start", "repeat"):
        value = task.get(key)
        if value in ("", None) and key in ("start", "repeat"):
            continue
        _field(console, key, value)
    if task.get("starred"):
        _field(console, "starred", "yes")
    tags = task.get("tags", [])
    if tags:
        _field(console, "tags", ", ".join(tags))
    if verbose:
        for key in ("context", "folder", "due_date"):
            _field(console, key, task.get(key))
    note = task.get("note", "")
    if note:
        console.print(Text("  note:", style="t2t.key"))
        for line in note.splitlines():
            console.print(Text(f"    {line}"))


def _render_sync(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a normalization cycle with the list of changed tasks."""
    d = result.data
    _status_line(console, result)
    if d.get("dry_run"):
        console.print("  [t2t.warning]DRY RUN[/t2t.warning]")
    for key in ("source", "inspected", "modified", "pushed"):
        _field(console, key, d.get(key))

    items = d.get("items", [])
    if items and (verbose or d.get("dry_run")):
        console.print()
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("ID", style="t2t.id", no_wrap=True, justify="right")
        table.add_column("Title", style="t2t.title")
        for item in items:
            table.add_row(str(item.get("id", "")), Text(str(item.get("title", ""))))
        console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "tokenize": _render_tokens,
    "resolve_date": _render_date,
    "pseudo_date": _render_date,
    "normalize": _render_normalize,
    "sync": _render_sync,
}
