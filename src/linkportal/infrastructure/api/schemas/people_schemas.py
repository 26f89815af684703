"""Pydantic schemas for people operations."""

from pydantic import BaseModel, Field


class GitHubAccountResponse(BaseModel):
    """GitHub side of a person."""
    id: str
    login: str | None = None
    avatar: str | None = None


class CorporateIdentityResponse(BaseModel):
    """Corporate side of a person."""
    id: str
    alias: str | None = None
    preferredName: str | None = None
    userPrincipalName: str | None = None
    emailAddress: str | None = None


class PersonResponse(BaseModel):
    """A GitHub account with its corporate link, if any."""
    github: GitHubAccountResponse
    corporate: CorporateIdentityResponse | None = None
    isServiceAccount: bool = False
    warnings: list[str] = Field(default_factory=list)


class OrganizationMembershipsResponse(BaseModel):
    """Managed organizations the account is a member of."""
    id: str
    login: str | None = None
    organizations: list[str]


class TerminateRequest(BaseModel):
    """Request body for terminating an account."""
    reason: str | None = Field(default=None, max_length=500)
    continue_on_error: bool = False


class HistoryResponse(BaseModel):
    """Audit history of a destructive operation."""
    history: list[str]
