"""Output mode selection for ServiceResult.

Three modes: ``--json`` (machine), ``--quiet`` (ids or a status line), and
the default Rich rendering for humans.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from localstore.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from localstore.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
