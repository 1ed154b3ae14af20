"""Small formatting helpers for scan summaries."""

from __future__ import annotations


def format_duration(milliseconds: float) -> str:
    if milliseconds < 1000:
        return f"{milliseconds:.0f}ms"
    return f"{milliseconds / 1000:.1f}s"


def calculate_scan_rate(files_count: int, duration_ms: float) -> str:
    """Files per second, e.g. ``"42.0 files/s"``."""
    if duration_ms <= 0:
        return "n/a"
    return f"{files_count / (duration_ms / 1000):.1f} files/s"
