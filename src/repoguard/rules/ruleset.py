"""Compile configured patterns into a rule set; load custom YAML rules."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple

import yaml

from repoguard.config.defaults import CUSTOM_RULES_DIRNAME
from repoguard.config.loader import ConfigError, enabled_flag
from repoguard.config.schema import SEVERITIES, PatternConfig, ScanConfig
from repoguard.rules.models import Rule


class RuleSet(Sequence[Rule]):
    """Ordered, immutable collection of enabled, compiled rules."""

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: Tuple[Rule, ...] = tuple(rules)

    def __getitem__(self, index):  # type: ignore[override]
        return self._rules[index]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({[r.name for r in self._rules]!r})"

    @property
    def names(self) -> List[str]:
        return [r.name for r in self._rules]


def compile_rules(patterns: Iterable[PatternConfig]) -> RuleSet:
    """Compile every enabled pattern.

    Raises InvalidPatternError on the first regex that does not compile;
    nothing is skipped silently.
    """
    return RuleSet(Rule.from_config(p) for p in patterns if p.enabled)


# ---- custom rule loading ----


def load_custom_patterns(directory: Path) -> List[PatternConfig]:
    """Load YAML rule files from *directory*, in file-name order."""
    if not directory.is_dir():
        return []
    patterns: List[PatternConfig] = []
    for path in sorted(directory.iterdir()):
        if path.suffix in (".yaml", ".yml"):
            patterns.extend(_load_yaml_patterns(path))
    return patterns


def _load_yaml_patterns(path: Path) -> List[PatternConfig]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load custom rules from {path}: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        data = [data]

    patterns: List[PatternConfig] = []
    for entry in data:
        if not isinstance(entry, dict) or "name" not in entry or "regex" not in entry:
            raise ConfigError(f"{path}: each rule needs a 'name' and a 'regex'")
        severity = entry.get("severity", "medium")
        if severity not in SEVERITIES:
            raise ConfigError(f"{path}: rule {entry['name']!r} has unknown severity {severity!r}")
        patterns.append(
            PatternConfig(
                name=str(entry["name"]),
                regex=str(entry["regex"]),
                severity=severity,
                enabled=enabled_flag(entry, f"{path}: rule {entry['name']!r}"),
            )
        )
    return patterns


def with_custom_rules(config: ScanConfig, project_dir: Path) -> ScanConfig:
    """Append rules from ``<project_dir>/.repoguard-rules/`` to *config*."""
    extra = load_custom_patterns(project_dir / CUSTOM_RULES_DIRNAME)
    if not extra:
        return config
    return dataclasses.replace(config, patterns=config.patterns + tuple(extra))
