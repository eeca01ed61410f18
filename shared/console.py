"""
CyberVault Console Interface
=============================

Thin layer over :class:`rich.console.Console` with the CyberVault theme:
banner, section rules, tagged status lines, a findings table and a
spinner. Every piece of user-supplied text is escaped before it reaches
Rich markup, so ciphertext such as ``[abc]`` is printed literally.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_VAULT_THEME = Theme(
    {
        "vault.banner": "bold bright_cyan",
        "vault.section": "bold bright_magenta",
        "vault.success": "bold green",
        "vault.error": "bold red",
        "vault.info": "bold bright_blue",
        "vault.dim": "dim white",
        "vault.highlight": "bold bright_white",
        "vault.critical": "bold white on red",
        "vault.high": "bold red",
        "vault.medium": "bold yellow",
        "vault.low": "bold bright_cyan",
        "vault.informational": "bold bright_blue",
    }
)

_BANNER_ART = r"""
   ______      __              _    __            ____
  / ____/_  __/ /_  ___  _____| |  / /___ ___  __/ / /_
 / /   / / / / __ \/ _ \/ ___/| | / / __ `/ / / / / __/
/ /___/ /_/ / /_/ /  __/ /    | |/ / /_/ / /_/ / / /_
\____/\__, /_.___/\___/_/     |___/\__,_/\__,_/_/\__/
     /____/"""

_TAGLINE = "Client-side Cryptography & Password Toolkit"

# Severity value -> theme style
_SEVERITY_STYLES: dict[str, str] = {
    "CRITICAL": "vault.critical",
    "HIGH": "vault.high",
    "MEDIUM": "vault.medium",
    "LOW": "vault.low",
    "INFO": "vault.informational",
}


class ToolkitConsole:
    """Themed console used by every CyberVault command.

    Args:
        quiet: Drop all output (library use).
        record: Keep a copy of everything printed for :meth:`export_text`.
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        self._console = Console(theme=_VAULT_THEME, quiet=quiet, record=record, highlight=False)

    @property
    def rich(self) -> Console:
        return self._console

    def banner(self, version: str) -> None:
        """Logo, tagline and version in a centred panel."""
        body = Text(_BANNER_ART.strip("\n"), style="vault.banner")
        body.append(f"\n\n{_TAGLINE}", style="vault.highlight")
        body.append(f"\nv{version}", style="vault.dim")
        self._console.print(
            Panel(Align.center(body), border_style="bright_cyan", padding=(1, 2))
        )

    def section(self, title: str) -> None:
        self._console.rule(f"  {escape(title)}  ", style="vault.section")

    def _tagged(self, style: str, tag: str, message: str) -> None:
        self._console.print(f"[{style}]{tag}[/{style}] {escape(message)}")

    def success(self, message: str) -> None:
        self._tagged("vault.success", "[✔]", message)

    def error(self, message: str) -> None:
        self._tagged("vault.error", "[✘] ERROR:", message)

    def findings_table(self, findings: Sequence[Any]) -> None:
        """Severity-coloured table of :class:`~shared.models.Finding` objects.

        Nothing is printed for an empty list. The recommendation column is
        only added when at least one finding carries one.
        """
        if not findings:
            return

        with_advice = any(getattr(f, "recommendation", "") for f in findings)
        tbl = Table(
            title="Findings",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("#", style="dim", justify="right")
        tbl.add_column("Severity")
        tbl.add_column("Title")
        tbl.add_column("Description", ratio=2)
        if with_advice:
            tbl.add_column("Recommendation", style="vault.dim")

        for idx, finding in enumerate(findings, start=1):
            name = finding.severity.value
            style = _SEVERITY_STYLES.get(name, "vault.informational")
            row = [
                str(idx),
                f"[{style}]{name}[/{style}]",
                escape(finding.title),
                escape(finding.description),
            ]
            if with_advice:
                row.append(escape(finding.recommendation))
            tbl.add_row(*row)

        self._console.print(tbl)

    @contextmanager
    def status(self, message: str) -> Iterator[Status]:
        """Spinner shown while the block runs."""
        with self._console.status(
            f"[vault.info]{escape(message)}[/vault.info]", spinner="dots"
        ) as spinner:
            yield spinner

    def export_text(self) -> str:
        """Plain text of everything printed so far (needs ``record=True``)."""
        return self._console.export_text()
