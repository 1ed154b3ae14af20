"""RepoGuard CLI — Typer application with scan and init commands."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from repoguard import __version__

app = typer.Typer(
    name="repoguard",
    help="Find leaked secrets in a source tree.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

_FORMATS = ("terminal", "json", "html")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    path: str = typer.Option(".", "--path", "-p", help="Directory to scan"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .repoguard.json"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json | html"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file (JSON when --format is terminal)"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Parallel file workers (default: CPU count)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Stop after N seconds and report partial results"),
    redact_values: bool = typer.Option(False, "--redact", help="Redact matched values in written reports"),
    fail_on_findings: bool = typer.Option(False, "--fail-on-findings", help="Exit 1 if any issue is found"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Scan a directory tree for leaked secrets."""
    from repoguard.config.loader import ConfigError, load_config
    from repoguard.output import ReportWriteError, html_report, json_report, terminal
    from repoguard.rules.models import RuleError
    from repoguard.rules.ruleset import with_custom_rules
    from repoguard.scanner.cancel import CancelToken
    from repoguard.scanner.engine import ScanError, scan as run_scan

    _setup_logging(verbose)

    if format not in _FORMATS:
        console.print(f"[bold red]Invalid format:[/bold red] {format}")
        raise typer.Exit(code=2)

    root = Path(path)
    if not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] not a directory: {path}")
        raise typer.Exit(code=2)

    # --- Load config ---
    try:
        cfg = with_custom_rules(load_config(root, config), root)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if verbose:
        enabled = [p.name for p in cfg.patterns if p.enabled]
        console.print(f"[dim]Scanning {root.resolve()}[/dim]")
        console.print(f"[dim]Rules loaded: {len(enabled)} ({', '.join(enabled)})[/dim]")

    # --- Run scan ---
    cancel = CancelToken()
    timer: Optional[threading.Timer] = None
    if timeout is not None:
        timer = threading.Timer(timeout, cancel.cancel)
        timer.daemon = True
        timer.start()
    try:
        result = run_scan(root, cfg, workers=workers, cancel=cancel)
    except RuleError as exc:
        console.print(f"[bold red]Rule error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except ScanError as exc:
        console.print(f"[bold red]Scanner error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    finally:
        if timer is not None:
            timer.cancel()

    if verbose:
        console.print(
            f"[dim]{result.total_issues} issues found in {result.files_scanned} files[/dim]"
        )

    # --- Output ---
    try:
        if format == "terminal":
            terminal.render(result, console=console)
            if output:
                report = json_report.build_report(result, path, redact_values=redact_values)
                saved = json_report.save(report, Path(output))
                console.print(f"[green]✓[/green] JSON report saved to {saved}")
        elif format == "json":
            report = json_report.build_report(result, path, redact_values=redact_values)
            if output:
                saved = json_report.save(report, Path(output))
                console.print(f"[green]✓[/green] JSON report saved to {saved}")
            else:
                print(json_report.render(report))
        else:
            report = json_report.build_report(result, path, redact_values=redact_values)
            saved = html_report.save(report, Path(output) if output else None)
            console.print(f"[green]✓[/green] HTML report saved to {saved}")
    except ReportWriteError as exc:
        console.print(f"[bold red]Report error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- Exit code ---
    if fail_on_findings and result.findings:
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    path: str = typer.Option(".", "--path", "-p", help="Project directory"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing .repoguard.json"),
) -> None:
    """Write a starter .repoguard.json with the default rules."""
    from repoguard.config.loader import ConfigError, create_default_config

    try:
        config_path = create_default_config(Path(path), force=force)
    except ConfigError as exc:
        console.print(f"[yellow]⚠[/yellow]  {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"repoguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """RepoGuard — find leaked secrets before they ship."""
