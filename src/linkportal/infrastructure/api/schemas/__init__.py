"""Pydantic schemas for the HTTP API."""

from linkportal.infrastructure.api.schemas.people_schemas import (
    CorporateIdentityResponse,
    GitHubAccountResponse,
    HistoryResponse,
    OrganizationMembershipsResponse,
    PersonResponse,
    TerminateRequest,
)

__all__ = [
    "CorporateIdentityResponse",
    "GitHubAccountResponse",
    "HistoryResponse",
    "OrganizationMembershipsResponse",
    "PersonResponse",
    "TerminateRequest",
]
