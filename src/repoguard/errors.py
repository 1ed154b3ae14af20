"""Base exception shared by every RepoGuard error."""


class RepoGuardError(Exception):
    """Root of the RepoGuard exception hierarchy."""
