"""Exceptions raised by the GitHub client."""

from __future__ import annotations


class GitHubError(Exception):
    """Base exception for GitHub client failures."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GitHubConfigurationError(GitHubError):
    """Raised when required configuration (token, operation) is missing."""


class GitHubApiError(GitHubError):
    """Raised when the API answers with an error status."""


class GitHubRateLimitError(GitHubApiError):
    """Raised when the upstream service enforces a rate limit."""

    def __init__(self, message: str, retry_after: int | float | None = None):
        super().__init__(message, status_code=403)
        self.retry_after = retry_after


class GitHubTransportError(GitHubError):
    """Raised for network-level failures (timeouts, connection resets)."""
