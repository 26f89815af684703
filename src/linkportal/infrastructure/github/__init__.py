from .cache import CacheEntry, CacheOptions, ResponseCache
from .client import OPERATIONS, GitHubClient
from .exceptions import (
    GitHubApiError,
    GitHubConfigurationError,
    GitHubError,
    GitHubRateLimitError,
    GitHubTransportError,
)

__all__ = [
    "CacheEntry",
    "CacheOptions",
    "GitHubApiError",
    "GitHubClient",
    "GitHubConfigurationError",
    "GitHubError",
    "GitHubRateLimitError",
    "GitHubTransportError",
    "OPERATIONS",
    "ResponseCache",
]
