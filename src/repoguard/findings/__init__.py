"""Finding models and redaction."""

from repoguard.findings.models import Finding, ScanResult, Suppression
from repoguard.findings.redactor import redact

__all__ = ["Finding", "ScanResult", "Suppression", "redact"]
