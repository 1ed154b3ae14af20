"""Secret value redaction for safe output."""

from __future__ import annotations


def redact(value: str) -> str:
    """Partial reveal: first 4 + last 2 chars.

    Example: ``ghp_Abc123xyz9`` → ``ghp_...z9``. Values of six characters
    or fewer are replaced entirely.
    """
    if len(value) <= 6:
        return "[REDACTED]"
    return f"{value[:4]}...{value[-2:]}"
