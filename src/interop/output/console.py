"""Rich Console factory and theme for interop output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

INTEROP_THEME = Theme(
    {
        "interop.ok": "bold green",
        "interop.error": "bold red",
        "interop.warning": "bold yellow",
        "interop.op": "bold cyan",
        "interop.key": "dim",
        "interop.name": "bold blue",
        "interop.path": "dim",
        "interop.command": "bold",
        "interop.kind.global": "green",
        "interop.kind.project": "blue",
        "interop.kind.alias": "magenta",
        "interop.disabled": "dim red",
    }
)

_KIND_STYLES: dict[str, str] = {
    "global": "interop.kind.global",
    "project": "interop.kind.project",
    "alias": "interop.kind.alias",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=INTEROP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a reference kind."""
    return _KIND_STYLES.get(kind, "")
