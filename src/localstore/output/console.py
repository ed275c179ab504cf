"""Rich Console factory and theme for localstore output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LOCALSTORE_THEME = Theme(
    {
        "ls.ok": "bold green",
        "ls.error": "bold red",
        "ls.warning": "bold yellow",
        "ls.op": "bold cyan",
        "ls.key": "dim",
        "ls.id": "bold blue",
        "ls.name": "bold",
        "ls.money": "magenta",
        "ls.status.active": "yellow",
        "ls.status.returned": "green",
        "ls.status.available": "green",
        "ls.status.loaned": "red",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "active": "ls.status.active",
    "returned": "ls.status.returned",
    "available": "ls.status.available",
    "loaned": "ls.status.loaned",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=LOCALSTORE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a loan or book status."""
    return _STATUS_STYLES.get(status, "")
