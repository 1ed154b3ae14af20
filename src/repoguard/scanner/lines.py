"""Run every rule over every line of a text file."""

from __future__ import annotations

from typing import Iterable, List

from repoguard.errors import RepoGuardError
from repoguard.findings.models import Finding
from repoguard.rules.models import Rule


class FileReadError(RepoGuardError):
    """A candidate file could not be read as text."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


def read_text(path: str) -> str:
    """Read *path* as UTF-8 text. Binary content is rejected."""
    try:
        with open(path, encoding="utf-8", newline="") as f:
            content = f.read()
    except UnicodeDecodeError as exc:
        raise FileReadError(path, "not UTF-8 text") from exc
    except OSError as exc:
        raise FileReadError(path, exc.strerror or str(exc)) from exc
    if "\x00" in content:
        raise FileReadError(path, "binary content")
    return content


def scan_lines(path: str, content: str, rules: Iterable[Rule]) -> List[Finding]:
    """Return one Finding per match, ordered by line, then rule, then position."""
    rules = list(rules)
    findings: List[Finding] = []
    for index, line in enumerate(content.split("\n")):
        for rule in rules:
            for m in rule.finditer(line):
                findings.append(
                    Finding(
                        file=path,
                        line=index + 1,
                        rule_name=rule.name,
                        matched_text=m.group(0),
                        severity=rule.severity,
                    )
                )
    return findings
