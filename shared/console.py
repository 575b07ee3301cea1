"""
PassGuard Console
==================

Thin presentation layer over a Rich :class:`~rich.console.Console`:
banner, section rules, status lines and tables. Everything is printed to
stdout unless a *file* is given; ``quiet`` silences it entirely, which the
CLI uses for JSON output.
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_THEME = Theme(
    {
        "pg.title": "bold cyan",
        "pg.rule": "bold magenta",
        "pg.ok": "bold green",
        "pg.warn": "bold yellow",
        "pg.fail": "bold red",
        "pg.note": "bold blue",
        "pg.muted": "dim",
    }
)

# Status line prefixes, keyed by kind.
_STATUS: dict[str, tuple[str, str]] = {
    "success": ("pg.ok", "✔"),
    "warning": ("pg.warn", "!"),
    "error": ("pg.fail", "✘"),
    "info": ("pg.note", "i"),
}


class GuardConsole:
    """Console used by the PassGuard CLI and display classes.

    Usage::

        con = GuardConsole()
        con.banner("1.0.0")
        con.section("Resultados")
        con.success("La contraseña cumple la política")
    """

    def __init__(
        self,
        *,
        quiet: bool = False,
        record: bool = False,
        file: Any = None,
    ) -> None:
        self._console = Console(
            theme=_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
            file=file,
        )

    @property
    def rich(self) -> Console:
        return self._console

    def banner(self, version: str = "1.0.0") -> None:
        heading = Text("PassGuard", style="pg.title")
        heading.append("  política y fortaleza de contraseñas", style="default")
        heading.append(f"  v{version}", style="pg.muted")
        self._console.print(Panel(heading, border_style="cyan", expand=False))

    def section(self, title: str) -> None:
        self._console.rule(title, style="pg.rule")

    # ------------------------------------------------------------------ #
    #  Status lines
    # ------------------------------------------------------------------ #

    def status(self, kind: str, message: str) -> None:
        """Print *message* prefixed with the marker for *kind*."""
        style, marker = _STATUS[kind]
        line = Text(f"[{marker}] ", style=style)
        line.append(message)
        self._console.print(line)

    def success(self, message: str) -> None:
        self.status("success", message)

    def warning(self, message: str) -> None:
        self.status("warning", message)

    def error(self, message: str) -> None:
        self.status("error", message)

    def info(self, message: str) -> None:
        self.status("info", message)

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
    ) -> None:
        """Print a table; cells are converted with ``str`` and not parsed as markup."""
        tbl = Table(title=title, caption=caption, border_style="cyan", header_style="bold")
        for name in columns:
            tbl.add_column(name)
        for row in rows:
            tbl.add_row(*(Text(str(cell)) for cell in row))
        self._console.print(tbl)

    def export_text(self) -> str:
        """Recorded output as plain text; requires ``record=True``."""
        return self._console.export_text()
