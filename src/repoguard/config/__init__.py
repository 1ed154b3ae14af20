"""Configuration loading, schema, and defaults."""

from repoguard.config.defaults import DEFAULT_CONFIG
from repoguard.config.loader import ConfigError, load_config
from repoguard.config.schema import PatternConfig, ScanConfig, Severity, WhitelistEntry

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigError",
    "PatternConfig",
    "ScanConfig",
    "Severity",
    "WhitelistEntry",
    "load_config",
]
