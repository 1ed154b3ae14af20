"""Cooperative cancellation for long scans."""

from __future__ import annotations

import threading


class CancelToken:
    """Set once from any thread; polled by the walker and the file workers."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
