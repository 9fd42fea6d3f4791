"""Rich/JSON output helpers.

The CLI renders OperationResult for humans (Rich tables and colors) or
for machines (``--json``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from zuora.services.result import OperationResult


class OutputSettings(BaseModel):
    """Output switches taken from the global CLI flags."""

    model_config = {"frozen": True}

    json_output: bool = False
    verbose: bool = False


def format_result(result: OperationResult, *, settings: OutputSettings | None = None) -> str:
    """Format an OperationResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2, exclude_none=True)

    from zuora.output.renderers import render_result

    return render_result(result, verbose=settings.verbose)
