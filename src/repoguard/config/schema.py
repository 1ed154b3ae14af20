"""Configuration schema: frozen dataclasses for the scan configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Literal, Optional, Tuple

Severity = Literal["high", "medium", "low"]

SEVERITIES: Tuple[str, ...] = ("high", "medium", "low")


def is_severity(value: object) -> bool:
    """Return True if *value* is one of the known severity levels."""
    return isinstance(value, str) and value in SEVERITIES


@dataclass(frozen=True)
class PatternConfig:
    """A detection rule as written in the config file (regex still a string)."""

    name: str
    regex: str
    severity: Severity = "medium"
    enabled: bool = True


@dataclass(frozen=True)
class WhitelistEntry:
    """A (file, rule, match) combination known to be a false positive."""

    file_pattern: str
    rule_name: str
    match_substring: str
    reason: Optional[str] = None


@dataclass(frozen=True)
class ScanConfig:
    patterns: Tuple[PatternConfig, ...] = ()
    exclude_dirs: FrozenSet[str] = field(default_factory=frozenset)
    include_files: Tuple[str, ...] = ()
    exclude_files: Tuple[str, ...] = ()
    max_file_size: int = 1024 * 1024  # bytes
    whitelist: Tuple[WhitelistEntry, ...] = ()
