"""Command: split a title into description, date tokens and modifiers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from t2tctl.commands._base import T2tCommand

if TYPE_CHECKING:
    from t2tctl.commands._context import AppContext


@click.command(
    cls=T2tCommand,
    examples="""\
  t2tctl tokens "Buy a newspaper //tomorrow /top /errand"
  t2tctl tokens "Pay rent ///2026-10-25 ////monthly"
  t2tctl --json tokens 'Call Bob /fri /phone'""",
)
@click.argument("title")
@click.pass_obj
def tokens(app: AppContext, title: str) -> None:
    """Show how TITLE is split into tokens."""
    app.emit(app.normalize_service().tokenize(title))
