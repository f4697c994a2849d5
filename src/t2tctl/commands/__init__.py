"""Subcommand modules for t2tctl.

Provides register_commands() which uses deferred imports to keep
``t2tctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from t2tctl.commands.date import date_cmd, pseudo_date
    from t2tctl.commands.normalize import normalize
    from t2tctl.commands.sync import sync
    from t2tctl.commands.tokens import tokens

    cli.add_command(tokens)
    cli.add_command(date_cmd)
    cli.add_command(pseudo_date)
    cli.add_command(normalize)
    cli.add_command(sync)
