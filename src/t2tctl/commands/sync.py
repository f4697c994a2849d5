"""Command: run one normalization cycle over a JSON snapshot."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from t2tctl.commands._base import T2tCommand

if TYPE_CHECKING:
    from t2tctl.commands._context import AppContext


@click.command(
    cls=T2tCommand,
    examples="""\
  t2tctl sync tasks.json --dry-run
  t2tctl sync tasks.json
  t2tctl -q sync tasks.json""",
)
@click.argument("snapshot", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--dry-run", is_flag=True, help="Report changes without writing them back.")
@click.pass_obj
def sync(app: AppContext, snapshot: Path, dry_run: bool) -> None:
    """Normalize every task in SNAPSHOT and write the changed ones back."""
    from t2tctl.infrastructure.snapshot import SnapshotSource

    app.emit(app.cycle_service().run_once(SnapshotSource(snapshot), dry_run=dry_run))
