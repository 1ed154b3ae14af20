"""RepoGuard — find leaked secrets in a source tree."""

__version__ = "0.2.0"
