"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and colors), for
scripts (``--json``), or minimally (``--quiet``).  The formatter layer
picks the mode; :mod:`t2tctl.output.renderers` does the drawing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from t2tctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from t2tctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags taken from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; defaults to human-readable Rich output.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
