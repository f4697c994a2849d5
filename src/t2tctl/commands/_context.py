"""AppContext: settings, service factories and result emission for commands.

The root group builds one AppContext and stores it in ``ctx.obj``;
commands receive it through ``@click.pass_obj``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import click

from t2tctl.config.logging import configure_logging
from t2tctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from t2tctl.config.settings import T2tSettings
    from t2tctl.services.base import BaseService
    from t2tctl.services.cycle import CycleService
    from t2tctl.services.normalize import NormalizeService
    from t2tctl.services.result import ServiceResult

S = TypeVar("S", bound="BaseService")


class AppContext:
    """State shared by every subcommand of one invocation.

    Services are built lazily, each with the configured conventions and
    the (possibly pinned) clock.
    """

    def __init__(self, settings: T2tSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def _build(self, service_cls: type[S]) -> S:
        return service_cls(self.settings.conventions(), clock=self.settings.clock())

    def normalize_service(self) -> NormalizeService:
        from t2tctl.services.normalize import NormalizeService

        return self._build(NormalizeService)

    def cycle_service(self) -> CycleService:
        from t2tctl.services.cycle import CycleService

        return self._build(CycleService)

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Results go to stdout.  Failures go to stderr and exit with code 1.
        Outside JSON mode, warnings are echoed to stderr after the result.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
