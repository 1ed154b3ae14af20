"""Rich terminal reporter — colour, icons, severity pills."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from repoguard.findings.models import ScanResult
from repoguard.findings.redactor import redact
from repoguard.utils import calculate_scan_rate, format_duration

_SEVERITY_STYLE = {
    "high": "bold white on red",
    "medium": "bold black on yellow",
    "low": "bold black on bright_cyan",
}

_SEVERITY_ICON = {
    "high": "🔴",
    "medium": "🟡",
    "low": "🔵",
}


def _severity_pill(severity: str) -> Text:
    style = _SEVERITY_STYLE.get(severity, "")
    icon = _SEVERITY_ICON.get(severity, "")
    return Text(f" {icon} {severity.upper()} ", style=style)


def render(
    result: ScanResult,
    *,
    console: Optional[Console] = None,
    show_summary: bool = True,
) -> None:
    """Print scan results to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not result.findings:
        console.print()
        console.print("[bold green]✅ No secrets detected.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(
        title="RepoGuard Findings",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Severity", justify="center", width=12)
    table.add_column("Rule", style="cyan", min_width=14)
    table.add_column("File", style="magenta")
    table.add_column("Line", justify="right", style="green")
    table.add_column("Match", min_width=15)

    for finding in result.findings:
        # Text() so brackets in paths or matches are not read as markup
        table.add_row(
            _severity_pill(finding.severity),
            Text(finding.rule_name),
            Text(finding.file),
            str(finding.line),
            Text(redact(finding.matched_text)),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, result)

    console.print()
    console.print(
        f"[bold red]❌ {result.total_issues} potential secret(s) found "
        f"in {len(result.files_with_issues)} file(s).[/bold red]"
    )


def _print_summary(console: Console, result: ScanResult) -> None:
    by_sev = result.issues_by_severity
    console.print()
    console.print(f"[dim]Rules active:[/dim]   {result.active_rules}")
    console.print(f"[dim]Files scanned:[/dim]  {result.files_scanned}")
    console.print(f"[dim]Issues:[/dim]         {result.total_issues}")
    console.print(
        f"[dim]  high / medium / low:[/dim] "
        f"{by_sev['high']} / {by_sev['medium']} / {by_sev['low']}"
    )
    console.print(f"[dim]Suppressed:[/dim]     {len(result.suppressed)}")
    console.print(f"[dim]Errors:[/dim]         {len(result.errors)}")
    console.print(
        f"[dim]Duration:[/dim]       {format_duration(result.scan_duration_ms)} "
        f"({calculate_scan_rate(result.files_scanned, result.scan_duration_ms)})"
    )
    if result.cancelled:
        console.print("[yellow]⚠️  Scan was cancelled; results are partial.[/yellow]")
