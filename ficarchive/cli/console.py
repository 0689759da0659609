"""Rich output shared by the ficarchive commands."""

from typing import Any

from rich.console import Console as RichConsole
from rich.table import Table


class Console:
    """Results go to stdout, problems to stderr."""

    def __init__(self) -> None:
        self._out = RichConsole()
        self._err = RichConsole(stderr=True)

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._out.print(*args, **kwargs)

    def info(self, message: str) -> None:
        self._out.print(message, style="dim")

    def error(self, message: str, *, hint: str | None = None) -> None:
        self._err.print(f"[bold red]error:[/bold red] {message}")
        if hint:
            self._err.print(hint, style="dim")

    def key_values(self, rows: list[tuple[str, str]], *, title: str | None = None) -> None:
        """Two-column label/value table."""
        table = Table(title=title, show_header=False, box=None)
        table.add_column(style="cyan", no_wrap=True)
        table.add_column()
        for label, value in rows:
            table.add_row(label, value)
        self._out.print(table)


_console: Console | None = None


def get_console() -> Console:
    global _console
    if _console is None:
        _console = Console()
    return _console
