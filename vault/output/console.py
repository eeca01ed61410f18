"""
Vault Console Output
=====================

Rich-based console formatters for CyberVault results: crypto output
panel, password strength meter, generated password panel and file hash
report.

Uses the shared :class:`~shared.console.ToolkitConsole` for consistent
styling.
"""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import ToolkitConsole
from vault.core.models import (
    CryptoResult,
    FileHashReport,
    GeneratedPassword,
    StrengthAssessment,
)


# ===================================================================== #
#  Colour Maps
# ===================================================================== #

_TIER_COLOURS: dict[str, str] = {
    "weak": "bold red",
    "fair": "bold yellow",
    "good": "bold green",
    "strong": "bold bright_green",
}

_METER_WIDTH = 32


class VaultConsoleOutput:
    """Renders vault models to a :class:`ToolkitConsole`.

    Args:
        console: Shared console instance.
    """

    def __init__(self, console: ToolkitConsole) -> None:
        self.console = console
        self._rich = console.rich

    # ------------------------------------------------------------------ #
    #  Crypto
    # ------------------------------------------------------------------ #

    def display_crypto(self, result: CryptoResult) -> None:
        """Show the output (or error) of an encrypt / decrypt / hash call."""
        self.console.section(f"{result.operation.value.capitalize()} ({result.algorithm})")

        if not result.ok:
            self.console.error(result.message)
            return

        body = Text(result.output or "", style="bold bright_white")
        if not result.output:
            body = Text("(empty)", style="dim")
        self._rich.print(Panel(body, title="Output", border_style="cyan"))

    # ------------------------------------------------------------------ #
    #  Password strength
    # ------------------------------------------------------------------ #

    def display_strength(self, assessment: StrengthAssessment) -> None:
        """Display the strength meter, crack time and suggestions."""
        self.console.section("Password Strength")
        self._rich.print(self._meter(assessment))

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        colour = _TIER_COLOURS[assessment.tier.value]
        tbl.add_row("Strength", f"[{colour}]{assessment.tier.label}[/{colour}]")
        tbl.add_row("Score", f"{assessment.score}/8")
        tbl.add_row("Estimated crack time", assessment.crack_time)
        self._rich.print(tbl)

        if assessment.feedback:
            self._rich.print("[bold]Suggestions:[/bold]")
            for item in assessment.feedback:
                self._rich.print(f"  [yellow]•[/yellow] {escape(item)}")
        else:
            self.console.success("Your password is strong!")

    def _meter(self, assessment: StrengthAssessment) -> Panel:
        filled = int((assessment.score / 8) * _METER_WIDTH)
        colour = _TIER_COLOURS[assessment.tier.value]

        meter = Text()
        meter.append("[", style="dim")
        meter.append("█" * filled, style=colour)
        meter.append("░" * (_METER_WIDTH - filled), style="dim")
        meter.append("]  ", style="dim")
        meter.append(assessment.tier.label.upper(), style=colour)
        return Panel(meter, title="Strength Meter", border_style="cyan")

    # ------------------------------------------------------------------ #
    #  Generated password
    # ------------------------------------------------------------------ #

    def display_generated(self, generated: GeneratedPassword) -> None:
        """Show a generated password and its assessment."""
        self.console.section("Password Generator")
        self._rich.print(Panel(
            Text(generated.password, style="bold bright_white"),
            title=f"{generated.length} characters",
            subtitle=", ".join(generated.character_classes),
            border_style="cyan",
        ))
        self._rich.print(self._meter(generated.assessment))

    # ------------------------------------------------------------------ #
    #  File hash
    # ------------------------------------------------------------------ #

    def display_file_hash(self, report: FileHashReport) -> None:
        """Show a file digest and, when requested, the comparison result."""
        self.console.section("File Hash")

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        tbl.add_row("File", escape(report.file_name))
        tbl.add_row("Size", report.size_display)
        tbl.add_row("Algorithm", report.algorithm.label)
        tbl.add_row("Digest", report.digest)
        if report.expected is not None:
            tbl.add_row("Expected", escape(report.expected))
        tbl.add_row("VirusTotal", report.virustotal_url)
        self._rich.print(tbl)

        if report.matches is True:
            self.console.success("Hashes match")
        elif report.matches is False:
            self.console.error("Hashes do not match")
