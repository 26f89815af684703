"""API key authentication."""

from linkportal.infrastructure.auth.api_key_service import APIKeyService, api_key_service

__all__ = ["APIKeyService", "api_key_service"]
