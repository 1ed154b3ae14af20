"""Scanner — walker, line scanner, whitelist, engine."""

from repoguard.scanner.cancel import CancelToken
from repoguard.scanner.engine import ScanError, scan
from repoguard.scanner.lines import FileReadError, read_text, scan_lines
from repoguard.scanner.walker import TraversalError, WalkResult, glob_to_regex, walk
from repoguard.scanner.whitelist import WhitelistMatcher

__all__ = [
    "CancelToken",
    "FileReadError",
    "ScanError",
    "TraversalError",
    "WalkResult",
    "WhitelistMatcher",
    "glob_to_regex",
    "read_text",
    "scan",
    "scan_lines",
    "walk",
]
