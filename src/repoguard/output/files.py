"""Report file writing shared by the JSON and HTML reporters."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from repoguard.errors import RepoGuardError


class ReportWriteError(RepoGuardError):
    """Raised when a report file cannot be written."""


def default_report_path(extension: str) -> Path:
    """``repoguard-report-<epoch ms>.<extension>`` in the working directory."""
    return Path(f"repoguard-report-{int(time.time() * 1000)}.{extension}")


def write_report(text: str, path: Optional[Path], extension: str) -> Path:
    target = path if path is not None else default_report_path(extension)
    try:
        target.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ReportWriteError(f"Failed to save {extension.upper()} report to {target}: {exc}") from exc
    return target
