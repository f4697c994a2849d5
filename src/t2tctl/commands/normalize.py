"""Command: normalize a single ad-hoc task."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from t2tctl.commands._base import T2tCommand
from t2tctl.domain.dates import MAX_TIMESTAMP

if TYPE_CHECKING:
    from t2tctl.commands._context import AppContext


@click.command(
    cls=T2tCommand,
    examples="""\
  t2tctl normalize "Buy a newspaper //tomorrow /top /errand"
  t2tctl normalize "wf Bob to send the report"
  t2tctl normalize "Plan trip /nod" --note "~~//" --status next
  t2tctl --json normalize 'Renew passport /star /someday'""",
)
@click.argument("title")
@click.option("--note", default="", help="Existing note text (may hold a banner).")
@click.option("--status", default=None, help="Existing status name or shortcut.")
@click.option(
    "--due",
    "due_date",
    type=click.IntRange(0, MAX_TIMESTAMP),
    default=0,
    help="Existing due date (epoch seconds).",
)
@click.pass_obj
def normalize(
    app: AppContext,
    title: str,
    note: str,
    status: str | None,
    due_date: int,
) -> None:
    """Apply every title rule to TITLE and show the resulting task.

    No context or folder catalog is available here, so context and
    folder modifiers are kept as tags.
    """
    app.emit(
        app.normalize_service().normalize_title(title, note=note, status=status, due_date=due_date)
    )
