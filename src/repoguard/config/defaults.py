"""Default configuration, built once and never mutated."""

from repoguard.config.schema import PatternConfig, ScanConfig

DEFAULT_PATTERNS = (
    PatternConfig(
        name="API Key",
        regex=r"""api[_-]?key[_-]?[\w\d]*[\s]*[:=][\s]*['"]?([a-zA-Z0-9_\-]{20,})['"]?""",
        severity="high",
    ),
    PatternConfig(
        name="Password",
        regex=r"""password[\s]*[:=][\s]*['"]?([^\s'"]{6,})['"]?""",
        severity="high",
    ),
    PatternConfig(
        name="JWT Token",
        regex=r"eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*",
        severity="medium",
    ),
    PatternConfig(
        name="Private Key",
        regex=r"-----BEGIN [A-Z ]+ PRIVATE KEY-----",
        severity="high",
    ),
    PatternConfig(
        name="Database URL",
        regex=r"(mongodb|mysql|postgres)://[^\s]+",
        severity="medium",
    ),
)

DEFAULT_CONFIG = ScanConfig(
    patterns=DEFAULT_PATTERNS,
    exclude_dirs=frozenset({"node_modules", ".git", "dist", "coverage", ".next", "build"}),
    include_files=("*.js", "*.ts", "*.json", "*.env", "*.config", "*.yaml", "*.yml"),
    exclude_files=("*.min.js", "*.bundle.js"),
    max_file_size=1024 * 1024,  # 1 MiB
    whitelist=(),
)

CONFIG_FILENAME = ".repoguard.json"
CUSTOM_RULES_DIRNAME = ".repoguard-rules"
