"""Standalone HTML reporter (one page, inline CSS)."""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Any, Dict, List, Optional

from repoguard.output.files import write_report

_SEVERITY_COLORS = {
    "high": "#dc3545",
    "medium": "#ffc107",
    "low": "#6c757d",
}

_STYLE = """\
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
       margin: 0; padding: 20px; background-color: #f5f5f5; }
.container { max-width: 1200px; margin: 0 auto; background: white; border-radius: 8px;
             box-shadow: 0 2px 10px rgba(0,0,0,0.1); }
.header { background: #2c3e50; color: white; padding: 20px; border-radius: 8px 8px 0 0; }
.stats { display: flex; justify-content: space-around; padding: 20px; background: #ecf0f1; }
.stat { text-align: center; }
.stat-value { font-size: 2em; font-weight: bold; color: #2c3e50; }
.results { padding: 20px; }
.issue { border: 1px solid #ddd; margin: 10px 0; border-radius: 4px; overflow: hidden; }
.issue-header { padding: 10px 15px; font-weight: bold; display: flex;
                justify-content: space-between; align-items: center; }
.issue-content { padding: 15px; background: #f9f9f9; }
.severity-badge { padding: 4px 8px; border-radius: 4px; color: white; font-size: 0.8em;
                  text-transform: uppercase; }
.file-path { font-family: monospace; background: #e9ecef; padding: 2px 6px;
             border-radius: 3px; font-size: 0.9em; }
.match-text { font-family: monospace; background: #fff3cd; padding: 8px; border-radius: 4px;
              margin-top: 10px; border-left: 4px solid #ffc107; white-space: pre-wrap; }
"""


def _stat(value: Any, label: str, color: Optional[str] = None) -> str:
    style = f' style="color: {color}"' if color else ""
    return (
        f'<div class="stat"><div class="stat-value"{style}>{escape(str(value))}</div>'
        f"<div>{escape(label)}</div></div>"
    )


def _issue(item: Dict[str, Any]) -> str:
    color = _SEVERITY_COLORS.get(item["severity"], "#6c757d")
    return (
        '<div class="issue">'
        f'<div class="issue-header" style="background-color: {color}20;">'
        f'<span>{escape(item["pattern"])}</span>'
        f'<span class="severity-badge" style="background-color: {color}">'
        f'{escape(item["severity"])}</span></div>'
        '<div class="issue-content">'
        f'<p><strong>File:</strong> <span class="file-path">'
        f'{escape(item["file"])}:{item["line"]}</span></p>'
        f'<div class="match-text">{escape(item["match"])}</div>'
        "</div></div>"
    )


def render(report: Dict[str, Any]) -> str:
    """Render a report dict (see ``json_report.build_report``) as HTML."""
    by_sev = report["issuesBySeverity"]
    stats = [
        _stat(report["filesScanned"], "Files Scanned"),
        _stat(report["totalFiles"], "Files With Issues"),
        _stat(report["totalIssues"], "Total Issues"),
        _stat(by_sev["high"], "High Risk", _SEVERITY_COLORS["high"]),
        _stat(by_sev["medium"], "Medium Risk", _SEVERITY_COLORS["medium"]),
        _stat(by_sev["low"], "Low Risk", _SEVERITY_COLORS["low"]),
    ]
    issues: List[str] = [_issue(item) for item in report["results"]]
    if not issues:
        issues.append("<p>No issues found.</p>")

    return "\n".join([
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        "<title>RepoGuard Security Report</title>",
        f"<style>\n{_STYLE}</style>",
        "</head>",
        "<body>",
        '<div class="container">',
        '<div class="header">',
        "<h1>🛡️ RepoGuard Security Report</h1>",
        f"<p>Generated: {escape(report['timestamp'])}</p>",
        f"<p>Project: {escape(report['projectPath'])}</p>",
        "</div>",
        f'<div class="stats">{"".join(stats)}</div>',
        '<div class="results">',
        "<h2>Security Issues</h2>",
        *issues,
        "</div>",
        "</div>",
        "</body>",
        "</html>",
    ])


def save(report: Dict[str, Any], path: Optional[Path] = None) -> Path:
    return write_report(render(report), path, "html")
