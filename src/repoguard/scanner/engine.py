"""Core scan engine — orchestrates walk, line scan and whitelist filtering.

Per-file scanning may run on a thread pool. Results are gathered with
``Executor.map``, so they come back in walk order regardless of which
worker finishes first; the whitelist is applied once to the concatenated
list.

Exception safety: unexpected errors inside the scan loop are re-raised as
ScanError with the collected findings dropped, so matched secret values
never leak into tracebacks or error messages.
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Iterable, List, Optional

from repoguard.config.schema import ScanConfig
from repoguard.errors import RepoGuardError
from repoguard.findings.models import Finding, ScanResult
from repoguard.rules.models import Rule
from repoguard.rules.ruleset import compile_rules
from repoguard.scanner.cancel import CancelToken
from repoguard.scanner.lines import FileReadError, read_text, scan_lines
from repoguard.scanner.walker import walk
from repoguard.scanner.whitelist import WhitelistMatcher

logger = logging.getLogger(__name__)


class ScanError(RepoGuardError):
    """Raised on internal scanner error (never contains secret values)."""


@dataclass
class _FileOutcome:
    findings: List[Finding] = field(default_factory=list)
    error: Optional[FileReadError] = None


def _scan_file(
    path: str,
    rules: List[Rule],
    cancel: Optional[CancelToken],
) -> Optional[_FileOutcome]:
    """Scan one file. Returns None if the scan was cancelled before it started."""
    if cancel is not None and cancel.cancelled:
        return None
    try:
        content = read_text(path)
    except FileReadError as exc:
        return _FileOutcome(error=exc)
    return _FileOutcome(findings=scan_lines(path, content, rules))


def default_workers() -> int:
    return os.cpu_count() or 1


def scan(
    root: str | os.PathLike[str],
    config: ScanConfig,
    *,
    workers: Optional[int] = None,
    cancel: Optional[CancelToken] = None,
) -> ScanResult:
    """Scan every candidate file under *root*. Returns a ScanResult.

    Raises InvalidPatternError / RuleError before touching the filesystem
    if the rule set is bad. Unreadable directories and files are recorded
    in ``ScanResult.errors`` and skipped.
    """
    start = time.perf_counter()

    n_workers = default_workers() if workers is None else workers
    if n_workers < 1:
        raise ValueError(f"workers must be at least 1, got {n_workers}")

    # --- Compile rules (fatal on error) ---
    rules = list(compile_rules(config.patterns))
    whitelist = WhitelistMatcher(config.whitelist)
    logger.debug("Active rules: %s", ", ".join(r.name for r in rules) or "none")

    # --- Walk ---
    walked = walk(root, config, cancel)
    logger.info(
        "%d candidate files under %s (%d skipped by filters)",
        len(walked.files), os.fspath(root), walked.skipped,
    )

    errors: List[RepoGuardError] = list(walked.errors)
    raw_findings: List[Finding] = []
    files_scanned = 0
    task = partial(_scan_file, rules=rules, cancel=cancel)

    try:
        outcomes: Iterable[Optional[_FileOutcome]]
        if n_workers == 1 or len(walked.files) <= 1:
            outcomes = map(task, walked.files)
            files_scanned = _collect(outcomes, raw_findings, errors)
        else:
            with ThreadPoolExecutor(
                max_workers=n_workers, thread_name_prefix="repoguard-scan"
            ) as pool:
                outcomes = pool.map(task, walked.files)
                files_scanned = _collect(outcomes, raw_findings, errors)
    except RepoGuardError:
        raise
    except Exception as exc:
        raw_findings.clear()
        raise ScanError(
            f"Internal scanner error ({type(exc).__name__}). "
            "Secrets have been scrubbed from this error."
        ) from None

    # --- Whitelist, once over the complete list ---
    findings, suppressed = whitelist.filter(raw_findings)

    cancelled = cancel is not None and cancel.cancelled
    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "%d issues found in %d files (%d suppressed, %d errors)%s",
        len(findings), files_scanned, len(suppressed), len(errors),
        " (cancelled)" if cancelled else "",
    )

    return ScanResult(
        findings=findings,
        suppressed=suppressed,
        errors=errors,
        files_scanned=files_scanned,
        active_rules=len(rules),
        cancelled=cancelled,
        scan_duration_ms=round(elapsed, 2),
    )


def _collect(
    outcomes: Iterable[Optional[_FileOutcome]],
    findings: List[Finding],
    errors: List[RepoGuardError],
) -> int:
    """Drain *outcomes* into *findings* and *errors*; return the files attempted."""
    files_scanned = 0
    for outcome in outcomes:
        if outcome is None:
            continue
        files_scanned += 1
        if outcome.error is not None:
            logger.warning("%s", outcome.error)
            errors.append(outcome.error)
            continue
        findings.extend(outcome.findings)
    return files_scanned
