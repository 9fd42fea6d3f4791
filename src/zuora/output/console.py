"""Rich Console factory and theme for zuora output.

Consoles render to a StringIO buffer so ``format_result() -> str`` stays
testable. In non-TTY environments (tests, pipes) Rich drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ZUORA_THEME = Theme(
    {
        "zuora.ok": "bold green",
        "zuora.error": "bold red",
        "zuora.warning": "bold yellow",
        "zuora.op": "bold cyan",
        "zuora.key": "dim",
        "zuora.id": "bold blue",
        "zuora.field": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ZUORA_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
