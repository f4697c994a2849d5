"""Commands: resolve date text and compute pseudo due dates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from t2tctl.commands._base import T2tCommand

if TYPE_CHECKING:
    from t2tctl.commands._context import AppContext


@click.command(
    "date",
    cls=T2tCommand,
    examples="""\
  t2tctl date tomorrow
  t2tctl date "next fri"
  t2tctl date 24/12/26
  T2TCTL_TODAY=2026-10-21 t2tctl date mon""",
)
@click.argument("text")
@click.pass_obj
def date_cmd(app: AppContext, text: str) -> None:
    """Resolve TEXT (keyword, weekday or short date) to a date."""
    app.emit(app.normalize_service().resolve_date(text))


@click.command(
    "pseudo-date",
    cls=T2tCommand,
    examples="""\
  t2tctl pseudo-date
  t2tctl pseudo-date --status waiting
  t2tctl pseudo-date --status someday --context Work""",
)
@click.option("--status", default=None, help="Status name or shortcut (default: next action).")
@click.option("--context", default=None, help="Context name (Work and x Notes shift further out).")
@click.pass_obj
def pseudo_date(app: AppContext, status: str | None, context: str | None) -> None:
    """Show the placeholder due date for a status and context."""
    app.emit(app.normalize_service().pseudo_date(status=status, context=context))
