"""Click command and group classes that carry usage examples.

``--help`` stays short; ``--examples`` prints ready-to-paste invocations
and exits before any argument is validated or settings are loaded.
"""

from __future__ import annotations

from typing import Any

import click

EXAMPLES_HINT = "Run with --examples for sample invocations."


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    examples = getattr(ctx.command, "examples", None) or ""
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(examples)
    ctx.exit(0)


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag and a help hint pointing at it."""

    examples: str | None
    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_show_examples,
                help="Show usage examples.",
            )
        )

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)  # type: ignore[misc]
        if self.examples:
            formatter.write_paragraph()
            formatter.write_text(EXAMPLES_HINT)


class T2tCommand(_ExamplesMixin, click.Command):
    """Command accepting an ``examples`` keyword."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class T2tGroup(_ExamplesMixin, click.Group):
    """Group accepting an ``examples`` keyword.

    Subcommands declared with ``@group.command`` are :class:`T2tCommand`.
    """

    command_class = T2tCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
