"""StageSafe CLI — Typer application with scan, patterns, and init commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from stagesafe import __version__

app = typer.Typer(
    name="stagesafe",
    help="Stage source files and redact secrets before they leave your machine.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(config: Optional[str]):
    from stagesafe.config.loader import ConfigError, load_config

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _catalog(cfg):
    from stagesafe.config.loader import ConfigError
    from stagesafe.rules.registry import build_catalog

    try:
        return build_catalog(cfg.patterns)
    except ConfigError as exc:
        console.print(f"[bold red]Pattern error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    paths: List[Path] = typer.Argument(..., help="Files or directories to stage"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .stagesafe.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | bundle"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the JSON report (or the bundle text) to file"),
    no_redact: bool = typer.Option(False, "--no-redact", help="Send original content instead of placeholders"),
    allow_unredacted: bool = typer.Option(
        False, "--allow-unredacted", help="With --no-redact, send even if secrets are detected"
    ),
    allow_sensitive: bool = typer.Option(False, "--allow-sensitive", help="Admit .env, key, and credential files"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Stage PATHS, redact secrets, and report what would be sent for analysis."""
    from stagesafe.admission.controller import describe_outcome
    from stagesafe.admission.discovery import discover
    from stagesafe.config.loader import OUTPUT_FORMATS
    from stagesafe.gate.models import Blocked, Send
    from stagesafe.gate.payload import PayloadError, render_bundle, to_payload, validate_payload
    from stagesafe.output import json_report, terminal
    from stagesafe.session import StagingSession

    if verbose:
        _configure_logging()
    cfg = _load(config)

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if allow_sensitive:
        cfg.admission.allow_sensitive = True
    if no_redact:
        cfg.redaction.enabled = False
    if allow_unredacted:
        cfg.redaction.allow_unredacted = True

    catalog = _catalog(cfg)
    if verbose:
        console.print(f"[dim]Patterns loaded: {len(catalog)}[/dim]")

    # --- Admit each path as its own batch ---
    session = StagingSession(cfg.admission, catalog)
    for path in paths:
        if not path.exists():
            console.print(f"[bold red]Error:[/bold red] {path} does not exist")
            raise typer.Exit(code=2)
        outcome = session.add(discover(path))
        if cfg.output.format == "terminal":
            terminal.render_admission(outcome, console)
        elif notice := describe_outcome(outcome):
            console.print(f"[dim]{notice}[/dim]")

    # --- Gate ---
    result = session.analyze(cfg.redaction.enabled, cfg.redaction.allow_unredacted)

    # Redaction can grow a file past the cap; re-check before handoff.
    if isinstance(result, Send):
        try:
            validate_payload(to_payload(result), cfg.admission)
        except PayloadError as exc:
            console.print(f"[bold red]Payload error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc

    report_text: Optional[str] = None
    if cfg.output.format == "json":
        report_text = json_report.render(result)
        print(report_text)
    else:
        terminal.render(result, show_summary=cfg.output.show_summary, console=console)
        if cfg.output.format == "bundle" and isinstance(result, Send):
            report_text = render_bundle(result.files)
            print(report_text)

    if output:
        Path(output).write_text(report_text or json_report.render(result), encoding="utf-8")
        if verbose:
            console.print(f"[dim]Payload written to {output}[/dim]")

    if isinstance(result, Blocked):
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── patterns ──────────────────────────────────────────────────────────────────


@app.command()
def patterns(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .stagesafe.toml"),
) -> None:
    """List active redaction patterns in evaluation order."""
    from rich.table import Table

    from stagesafe.redaction.placeholder import placeholder_for

    catalog = _catalog(_load(config))

    table = Table(title="Redaction Patterns", title_style="bold", border_style="dim")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Placeholder", style="magenta")
    for i, pattern in enumerate(catalog.enabled_patterns(), start=1):
        table.add_row(str(i), pattern.id, pattern.name, placeholder_for(pattern.name))
    Console().print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .stagesafe.toml in the current directory."""
    from stagesafe.config.defaults import DEFAULT_TOML
    from stagesafe.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"stagesafe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """StageSafe — stage, redact, and gate files before analysis."""
