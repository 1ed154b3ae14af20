"""Load, merge and save configuration from .repoguard.json and env vars."""

from __future__ import annotations

import dataclasses
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from repoguard.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from repoguard.config.schema import (
    SEVERITIES,
    PatternConfig,
    ScanConfig,
    WhitelistEntry,
    is_severity,
)
from repoguard.errors import RepoGuardError


class ConfigError(RepoGuardError):
    """Raised when config is malformed or unreadable."""


def find_config_file(project_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = project_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top-level value must be an object")
    return data


def _string_list(raw: Dict[str, Any], key: str) -> List[str]:
    value = raw[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return value


def enabled_flag(entry: Dict[str, Any], where: str) -> bool:
    """Read a rule's optional ``enabled`` key, which must be a real boolean."""
    value = entry.get("enabled", True)
    if not isinstance(value, bool):
        raise ConfigError(f"{where}: 'enabled' must be true or false, got {value!r}")
    return value


def _build_pattern(entry: Any, index: int) -> PatternConfig:
    if not isinstance(entry, dict):
        raise ConfigError(f"patterns[{index}] must be an object")
    try:
        name = entry["name"]
        regex = entry["regex"]
    except KeyError as exc:
        raise ConfigError(f"patterns[{index}] is missing {exc.args[0]!r}") from exc
    severity = entry.get("severity", "medium")
    if not is_severity(severity):
        raise ConfigError(
            f"patterns[{index}] ({name}): severity must be one of "
            f"{', '.join(SEVERITIES)}, got {severity!r}"
        )
    return PatternConfig(
        name=str(name),
        regex=str(regex),
        severity=severity,
        enabled=enabled_flag(entry, f"patterns[{index}] ({name})"),
    )


def _build_whitelist_entry(entry: Any, index: int) -> WhitelistEntry:
    if not isinstance(entry, dict):
        raise ConfigError(f"whitelist[{index}] must be an object")
    try:
        return WhitelistEntry(
            file_pattern=str(entry["filePattern"]),
            rule_name=str(entry["ruleName"]),
            match_substring=str(entry["matchSubstring"]),
            reason=entry.get("reason"),
        )
    except KeyError as exc:
        raise ConfigError(f"whitelist[{index}] is missing {exc.args[0]!r}") from exc


def config_from_dict(raw: Dict[str, Any], base: ScanConfig = DEFAULT_CONFIG) -> ScanConfig:
    """Overlay the user values in *raw* on *base*.

    Each top-level key replaces the base field wholesale; lists are not
    merged element by element. Unknown keys are ignored.
    """
    overrides: Dict[str, Any] = {}

    if "patterns" in raw:
        if not isinstance(raw["patterns"], list):
            raise ConfigError("'patterns' must be a list")
        overrides["patterns"] = tuple(
            _build_pattern(p, i) for i, p in enumerate(raw["patterns"])
        )
    if "excludeDirs" in raw:
        overrides["exclude_dirs"] = frozenset(_string_list(raw, "excludeDirs"))
    if "includeFiles" in raw:
        overrides["include_files"] = tuple(_string_list(raw, "includeFiles"))
    if "excludeFiles" in raw:
        overrides["exclude_files"] = tuple(_string_list(raw, "excludeFiles"))
    if "maxFileSize" in raw:
        size = raw["maxFileSize"]
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise ConfigError(f"'maxFileSize' must be a non-negative integer, got {size!r}")
        overrides["max_file_size"] = size
    if "whitelist" in raw:
        if not isinstance(raw["whitelist"], list):
            raise ConfigError("'whitelist' must be a list")
        overrides["whitelist"] = tuple(
            _build_whitelist_entry(w, i) for i, w in enumerate(raw["whitelist"])
        )

    return dataclasses.replace(base, **overrides)


def config_to_dict(config: ScanConfig) -> Dict[str, Any]:
    """Serialise *config* in the on-disk JSON shape."""
    whitelist: List[Dict[str, Any]] = []
    for w in config.whitelist:
        whitelist.append({
            "filePattern": w.file_pattern,
            "ruleName": w.rule_name,
            "matchSubstring": w.match_substring,
            **({"reason": w.reason} if w.reason else {}),
        })
    return {
        "patterns": [
            {"name": p.name, "regex": p.regex, "severity": p.severity, "enabled": p.enabled}
            for p in config.patterns
        ],
        "excludeDirs": sorted(config.exclude_dirs),
        "includeFiles": list(config.include_files),
        "excludeFiles": list(config.exclude_files),
        "maxFileSize": config.max_file_size,
        "whitelist": whitelist,
    }


def _merge_env_overrides(cfg: ScanConfig) -> ScanConfig:
    """Apply REPOGUARD_* environment variable overrides."""
    overrides: Dict[str, Any] = {}
    if val := os.environ.get("REPOGUARD_MAX_FILE_SIZE"):
        try:
            size = int(val)
        except ValueError:
            size = -1
        if size >= 0:
            overrides["max_file_size"] = size
    if val := os.environ.get("REPOGUARD_EXCLUDE_DIRS"):
        extra = {d.strip() for d in val.split(",") if d.strip()}
        overrides["exclude_dirs"] = cfg.exclude_dirs | extra
    return dataclasses.replace(cfg, **overrides) if overrides else cfg


def load_config(
    project_dir: Path,
    config_override: Optional[str] = None,
) -> ScanConfig:
    """Load, validate, and return a ScanConfig."""
    config_path = find_config_file(project_dir, config_override)

    if config_path is None:
        cfg = DEFAULT_CONFIG
    else:
        cfg = config_from_dict(_parse_json(config_path))

    return _merge_env_overrides(cfg)


def save_config(config: ScanConfig, path: Path) -> None:
    try:
        path.write_text(json.dumps(config_to_dict(config), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to write {path}: {exc}") from exc


def create_default_config(project_dir: Path, *, force: bool = False) -> Path:
    """Write the default config into *project_dir*. Returns the file path."""
    path = project_dir / CONFIG_FILENAME
    if path.exists() and not force:
        raise ConfigError(f"{CONFIG_FILENAME} already exists at {path}")
    save_config(DEFAULT_CONFIG, path)
    return path
