"""JSON reporter."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from repoguard.findings.models import ScanResult
from repoguard.findings.redactor import redact
from repoguard.output.files import write_report


def build_report(
    result: ScanResult,
    project_path: str,
    *,
    redact_values: bool = False,
) -> Dict[str, Any]:
    """Convert ScanResult to a JSON-serialisable dict."""
    results: List[Dict[str, Any]] = []
    for f in result.findings:
        results.append({
            "file": f.file,
            "line": f.line,
            "pattern": f.rule_name,
            "match": redact(f.matched_text) if redact_values else f.matched_text,
            "severity": f.severity,
        })

    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "projectPath": project_path,
        "filesScanned": result.files_scanned,
        "totalFiles": len(result.files_with_issues),
        "totalIssues": result.total_issues,
        "issuesBySeverity": result.issues_by_severity,
        "suppressed": len(result.suppressed),
        "errors": [str(e) for e in result.errors],
        "cancelled": result.cancelled,
        "results": results,
    }


def render(report: Dict[str, Any]) -> str:
    """Return formatted JSON string."""
    return json.dumps(report, indent=2)


def save(report: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Write *report* to *path* (or a timestamped default). Returns the path."""
    return write_report(render(report), path, "json")
