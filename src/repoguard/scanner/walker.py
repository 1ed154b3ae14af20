"""Enumerate candidate files under include/exclude/size rules.

Traversal is depth-first pre-order, driven by an explicit stack of
directory iterators so arbitrarily deep trees never hit the recursion
limit. Entries are sorted by name, which makes the output order the same
on every platform.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Tuple

from repoguard.config.schema import ScanConfig
from repoguard.errors import RepoGuardError
from repoguard.scanner.cancel import CancelToken

logger = logging.getLogger(__name__)


class TraversalError(RepoGuardError):
    """A directory (or a file's metadata) could not be read during the walk."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"Cannot read {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


@dataclass
class WalkResult:
    files: List[str] = field(default_factory=list)
    errors: List[TraversalError] = field(default_factory=list)
    skipped: int = 0  # files rejected by name or size


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a simplified glob (only ``*`` is special) to a regex.

    The result is case-insensitive and meant for ``fullmatch`` on a base name.
    """
    body = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.compile(body, re.IGNORECASE | re.DOTALL)


class FileFilter:
    """Name and size checks applied to every regular file."""

    def __init__(self, config: ScanConfig) -> None:
        self._include = [glob_to_regex(p) for p in config.include_files]
        self._exclude = [glob_to_regex(p) for p in config.exclude_files]
        self.max_size = config.max_file_size

    def accepts_name(self, name: str) -> bool:
        if not any(p.fullmatch(name) for p in self._include):
            return False
        return not any(p.fullmatch(name) for p in self._exclude)

    def accepts_size(self, size: int) -> bool:
        return size <= self.max_size


def walk(
    root: str | os.PathLike[str],
    config: ScanConfig,
    cancel: Optional[CancelToken] = None,
) -> WalkResult:
    """Return the candidate files under *root* in deterministic order."""
    result = WalkResult()
    file_filter = FileFilter(config)
    visited: Set[Tuple[int, int]] = set()
    stack: List[Iterator[os.DirEntry[str]]] = []

    def enter(path: str) -> None:
        try:
            st = os.stat(path)
            key = (st.st_dev, st.st_ino)
            if key in visited:
                logger.debug("Skipping already visited directory %s", path)
                return
            visited.add(key)
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            err = TraversalError(path, exc)
            result.errors.append(err)
            logger.warning("%s", err)
            return
        stack.append(iter(entries))

    enter(os.fspath(root))

    while stack:
        if cancel is not None and cancel.cancelled:
            logger.info("Walk cancelled after %d candidate files", len(result.files))
            break

        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        path = os.path.normpath(entry.path)
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError:
            is_dir = is_file = False

        if is_dir:
            if entry.name in config.exclude_dirs:
                logger.debug("Excluded directory %s", path)
                continue
            enter(path)
            continue

        # broken symlinks, sockets, fifos
        if not is_file:
            continue

        if not file_filter.accepts_name(entry.name):
            result.skipped += 1
            continue

        try:
            size = entry.stat().st_size
        except OSError as exc:
            err = TraversalError(path, exc)
            result.errors.append(err)
            logger.warning("%s", err)
            continue

        if not file_filter.accepts_size(size):
            logger.debug("Skipping %s (%d bytes > %d)", path, size, file_filter.max_size)
            result.skipped += 1
            continue

        result.files.append(path)

    return result
