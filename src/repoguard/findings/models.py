"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from repoguard.config.schema import SEVERITIES, Severity, WhitelistEntry
from repoguard.errors import RepoGuardError


@dataclass(frozen=True)
class Finding:
    """One rule match on one line of one file."""

    file: str
    line: int  # 1-based
    rule_name: str
    matched_text: str
    severity: Severity


@dataclass(frozen=True)
class Suppression:
    """Audit record of a finding removed by the whitelist."""

    finding: Finding
    entry: WhitelistEntry

    @property
    def reason(self) -> str:
        return self.entry.reason or "whitelisted"


@dataclass
class ScanResult:
    """Complete result of a scan run."""

    findings: List[Finding] = field(default_factory=list)
    suppressed: List[Suppression] = field(default_factory=list)
    errors: List[RepoGuardError] = field(default_factory=list)
    files_scanned: int = 0
    active_rules: int = 0
    cancelled: bool = False
    scan_duration_ms: float = 0.0

    @property
    def total_issues(self) -> int:
        return len(self.findings)

    @property
    def issues_by_severity(self) -> Dict[str, int]:
        counts = {sev: 0 for sev in SEVERITIES}
        for f in self.findings:
            counts[f.severity] += 1
        return counts

    @property
    def files_with_issues(self) -> List[str]:
        """Distinct files that have at least one finding, in discovery order."""
        return list(dict.fromkeys(f.file for f in self.findings))
