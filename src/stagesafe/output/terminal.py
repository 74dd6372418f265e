"""Rich terminal reporter — admission notice, redaction table, gate verdict."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from stagesafe.admission.controller import describe_outcome
from stagesafe.admission.models import AdmissionOutcome
from stagesafe.gate.models import Blocked, GateOutcome
from stagesafe.redaction.engine import describe_summary
from stagesafe.redaction.models import RedactionSummary


def _format_bytes(n: int) -> str:
    if n < 1024:
        return f"{n} B"
    if n < 1024 * 1024:
        return f"{n / 1024:.1f} KB"
    return f"{n / (1024 * 1024):.1f} MB"


def render_admission(outcome: AdmissionOutcome, console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True)
    notice = describe_outcome(outcome)
    if notice:
        console.print(f"[yellow]⚠[/yellow]  {notice}")
    console.print(
        f"[dim]Staged:[/dim]  {len(outcome.accepted)} file(s), "
        f"{_format_bytes(outcome.accepted_size)}"
    )


def _summary_table(summary: RedactionSummary) -> Table:
    table = Table(title="Redaction Summary", title_style="bold", border_style="dim")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Secret-like matches", str(summary.total_matches))
    table.add_row("Files with matches", str(summary.files_with_matches))
    table.add_row("Patterns", ", ".join(sorted(summary.patterns)) or "-")
    return table


def render(
    outcome: GateOutcome,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print the gate decision to the terminal using Rich."""
    console = console or Console(stderr=True)

    if outcome.summary is not None and show_summary:
        console.print()
        console.print(_summary_table(outcome.summary))

    console.print()
    if isinstance(outcome, Blocked):
        console.print(f"[bold red]❌ BLOCKED — {outcome.message}[/bold red]")
        return

    if outcome.unredacted_override:
        console.print(
            "[bold yellow]⚠️  Sending UNREDACTED content — "
            f"{outcome.summary.total_matches} secret-like match(es) included.[/bold yellow]"
        )
    elif outcome.redacted and (notice := describe_summary(outcome.summary)):
        console.print(f"[green]✓[/green] {notice}")

    console.print(
        f"[bold green]✅ {len(outcome.files)} file(s) ready for analysis "
        f"({'redacted' if outcome.redacted else 'original content'}).[/bold green]"
    )
