"""Root CLI group for t2tctl with global flags and command registration."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import click

from t2tctl import __version__
from t2tctl.commands import register_commands
from t2tctl.commands._base import T2tGroup
from t2tctl.commands._context import AppContext
from t2tctl.config.settings import T2tSettings


@click.group(
    cls=T2tGroup,
    invoke_without_command=True,
    examples="""\
  t2tctl tokens "Buy a newspaper //tomorrow /top /errand"
  t2tctl date "next monday"
  t2tctl --json normalize "wf Bob /work"
  t2tctl -c ~/t2tctl.toml sync tasks.json --dry-run""",
)
@click.version_option(version=__version__, prog_name="t2tctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Pretend today is this date (YYYY-MM-DD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    today: datetime | None,
) -> None:
    """t2tctl: normalize task titles into structured task fields.

    Dates are resolved against the local clock unless --today or
    T2TCTL_TODAY pins it.
    """
    flags: dict[str, Any] = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    if today is not None:
        flags["today"] = today.date()
    settings = T2tSettings.from_cli(config_path=config_path, **flags)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
