"""
PassGuard Console Output
=========================

Rich-based console formatters for strength reports: a colour-banded
strength meter, a details table, the list of violated rules and the
improvement suggestions, plus a summary table for batch runs.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import GuardConsole
from passguard.core.models import StrengthLabel, StrengthReport

_LABEL_COLOURS: dict[StrengthLabel, str] = {
    StrengthLabel.VERY_WEAK: "bold white on red",
    StrengthLabel.WEAK: "bold red",
    StrengthLabel.FAIR: "bold yellow",
    StrengthLabel.STRONG: "bold green",
    StrengthLabel.VERY_STRONG: "bold bright_green",
}

_METER_WIDTH = 40


class PassGuardConsoleOutput:
    """Console output formatters for PassGuard results.

    Usage::

        output = PassGuardConsoleOutput(GuardConsole())
        output.display_report(engine.assess("Fixia2024Secure!"))
    """

    def __init__(self, console: Optional[GuardConsole] = None) -> None:
        self.console = console or GuardConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Single candidate
    # ------------------------------------------------------------------ #

    def strength_meter(self, report: StrengthReport) -> Text:
        """Build the 0-100 meter as a Rich :class:`Text`."""
        filled = max(0, min(_METER_WIDTH, int(report.score / 100 * _METER_WIDTH)))
        colour = _LABEL_COLOURS.get(report.label, "white")

        meter = Text()
        meter.append("Puntuación: ", style="bold")
        meter.append(f"{report.score}/100  ")
        meter.append("[", style="dim")
        for i in range(_METER_WIDTH):
            if i >= filled:
                meter.append("░", style="dim")
            elif i < _METER_WIDTH * 0.3:
                meter.append("█", style="red")
            elif i < _METER_WIDTH * 0.5:
                meter.append("█", style="dark_orange")
            elif i < _METER_WIDTH * 0.7:
                meter.append("█", style="yellow")
            else:
                meter.append("█", style="green")
        meter.append("]", style="dim")
        meter.append("  ")
        meter.append(report.label.value, style=colour)
        return meter

    def display_report(self, report: StrengthReport) -> None:
        """Display a strength report with meter, details and violations."""
        self.console.section("Análisis de contraseña")
        self._rich.print(
            Panel(self.strength_meter(report), title="Fortaleza", border_style="cyan")
        )

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Propiedad", style="bold")
        tbl.add_column("Valor")
        tbl.add_row("Contraseña", escape(report.password_masked))
        tbl.add_row("Longitud", str(report.length))
        tbl.add_row("Clases", ", ".join(report.character_classes) or "-")
        tbl.add_row("Entropía estimada", f"{report.entropy_bits:.2f} bits")
        tbl.add_row("Cumple la política", "Sí" if report.compliant else "No")
        self._rich.print(tbl)

        if report.violations:
            self._rich.print()
            self._rich.print("[bold]Requisitos no cumplidos:[/bold]")
            for violation in report.violations:
                self._rich.print(
                    f"  [red]✘[/red] {escape(violation.message)} "
                    f"[dim]({violation.rule_id})[/dim]"
                )

        if report.suggestions:
            self._rich.print()
            self._rich.print("[bold]Sugerencias:[/bold]")
            for suggestion in report.suggestions:
                self._rich.print(f"  [bright_cyan]•[/bright_cyan] {escape(suggestion)}")

        self._rich.print()
        if report.compliant:
            self.console.success("La contraseña cumple la política")
        else:
            self.console.error(
                f"La contraseña incumple {len(report.violations)} requisito(s)"
            )

    # ------------------------------------------------------------------ #
    #  Batch runs
    # ------------------------------------------------------------------ #

    def display_batch(self, reports: Sequence[tuple[int, StrengthReport]]) -> None:
        """Summary table for ``(line_number, report)`` pairs."""
        rows = [
            (
                line_no,
                report.password_masked,
                report.score,
                report.label.value,
                "Sí" if report.compliant else "No",
                ", ".join(v.rule_id for v in report.violations) or "-",
            )
            for line_no, report in reports
        ]
        self.console.table(
            "Resultados",
            ["Línea", "Contraseña", "Puntuación", "Nivel", "Cumple", "Reglas"],
            rows,
        )
