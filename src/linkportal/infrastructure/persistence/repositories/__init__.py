"""Repositories for database access."""

from linkportal.infrastructure.persistence.repositories.api_key_repository import (
    APIKeyRepository,
)
from linkportal.infrastructure.persistence.repositories.link_repository import LinkRepository

__all__ = [
    "APIKeyRepository",
    "LinkRepository",
]
