"""Suppress known false positives listed in the config whitelist.

An entry suppresses a finding when all three hold:
  - the finding's path contains ``file_pattern`` (a suffix is one case of this);
  - the finding's rule name equals ``rule_name``;
  - the matched text contains ``match_substring``.

Matching is plain substring containment, not path or value equality, so a
short ``match_substring`` can hide more than the one secret it was written
for. Separators are normalised to ``/`` before comparing paths.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from repoguard.config.schema import WhitelistEntry
from repoguard.findings.models import Finding, Suppression


def _normalise(path: str) -> str:
    return path.replace("\\", "/")


class WhitelistMatcher:
    def __init__(self, entries: Iterable[WhitelistEntry]) -> None:
        self._entries: Tuple[WhitelistEntry, ...] = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def is_whitelisted(self, finding: Finding) -> Optional[WhitelistEntry]:
        """Return the first entry that suppresses *finding*, else None."""
        path = _normalise(finding.file)
        for entry in self._entries:
            file_pattern = _normalise(entry.file_pattern)
            if file_pattern not in path:
                continue
            if finding.rule_name != entry.rule_name:
                continue
            if entry.match_substring not in finding.matched_text:
                continue
            return entry
        return None

    def filter(self, findings: Iterable[Finding]) -> Tuple[List[Finding], List[Suppression]]:
        """Split *findings* into (kept, suppressed), preserving order."""
        kept: List[Finding] = []
        suppressed: List[Suppression] = []
        for finding in findings:
            entry = self.is_whitelisted(finding)
            if entry is None:
                kept.append(finding)
            else:
                suppressed.append(Suppression(finding=finding, entry=entry))
        return kept, suppressed
