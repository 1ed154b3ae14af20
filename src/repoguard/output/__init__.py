"""Reporters — terminal, JSON and HTML."""

from repoguard.output.files import ReportWriteError

__all__ = ["ReportWriteError"]
