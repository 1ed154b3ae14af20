"""Compiled rule model. The regex is compiled eagerly, once per rule set."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from repoguard.config.schema import SEVERITIES, PatternConfig, Severity
from repoguard.errors import RepoGuardError


class RuleError(RepoGuardError):
    """Raised when a rule definition is unusable."""


class InvalidPatternError(RuleError):
    """Raised when a rule's regex does not compile."""

    def __init__(self, rule_name: str, pattern: str, cause: re.error) -> None:
        super().__init__(f"Rule {rule_name!r}: invalid pattern {pattern!r}: {cause}")
        self.rule_name = rule_name
        self.pattern = pattern
        self.cause = cause


@dataclass(frozen=True)
class Rule:
    """A single detection rule, ready to run against a line of text."""

    name: str
    pattern: re.Pattern[str]
    severity: Severity
    enabled: bool = True

    @classmethod
    def from_config(cls, entry: PatternConfig) -> "Rule":
        if entry.severity not in SEVERITIES:
            raise RuleError(
                f"Rule {entry.name!r}: severity must be one of "
                f"{', '.join(SEVERITIES)}, got {entry.severity!r}"
            )
        try:
            compiled = re.compile(entry.regex, re.IGNORECASE)
        except re.error as exc:
            raise InvalidPatternError(entry.name, entry.regex, exc) from exc
        return cls(
            name=entry.name,
            pattern=compiled,
            severity=entry.severity,
            enabled=entry.enabled,
        )

    def finditer(self, line: str) -> Iterator[re.Match[str]]:
        return self.pattern.finditer(line)
