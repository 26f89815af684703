"""People API routes.

Lookup, unlink and termination of GitHub accounts linked to corporate
identities.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from linkportal.core.errors import NotFoundError
from linkportal.core.logging import get_logger
from linkportal.domain.services.account import Account
from linkportal.infrastructure.api.dependencies import OperationsDep, require_api
from linkportal.infrastructure.api.schemas.people_schemas import (
    CorporateIdentityResponse,
    GitHubAccountResponse,
    HistoryResponse,
    OrganizationMembershipsResponse,
    PersonResponse,
    TerminateRequest,
)
from linkportal.infrastructure.persistence.models import APIKeyModel

logger = get_logger(__name__)

router = APIRouter()

PeopleKey = Annotated[APIKeyModel, Depends(require_api("people"))]
UnlinkKey = Annotated[APIKeyModel, Depends(require_api("unlink"))]


def to_person_response(account: Account) -> PersonResponse:
    """Convert an account to its API representation."""
    corporate = None
    link = account.link
    if link is not None:
        corporate = CorporateIdentityResponse(
            id=link.corporate_id,
            alias=account.corporate_alias(),
            preferredName=link.corporate_display_name,
            userPrincipalName=link.corporate_username,
            emailAddress=account.contact_email(),
        )
    return PersonResponse(
        github=GitHubAccountResponse(
            id=account.id,
            login=account.login,
            avatar=account.avatar_url,
        ),
        corporate=corporate,
        isServiceAccount=bool(link and link.is_service_account),
        warnings=list(account.warnings),
    )


@router.get("/{github_id}", response_model=PersonResponse)
async def get_person(
    github_id: str,
    operations: OperationsDep,
    api_key: PeopleKey,
) -> PersonResponse:
    """Get a GitHub account and its corporate link."""
    account = operations.get_account(github_id)
    await account.get_details_and_link()
    if account.login is None and account.link is None:
        raise NotFoundError(f"Could not find a person with GitHub ID {github_id}")
    return to_person_response(account)


@router.get("/{github_id}/organizations", response_model=OrganizationMembershipsResponse)
async def get_person_organizations(
    github_id: str,
    operations: OperationsDep,
    api_key: PeopleKey,
) -> OrganizationMembershipsResponse:
    """List the managed organizations the account belongs to.

    Only organizations the API key is scoped to are listed.
    """
    account = operations.get_account(github_id)
    organizations = await account.get_operational_organization_memberships()
    return OrganizationMembershipsResponse(
        id=account.id,
        login=account.login,
        organizations=[
            org.name for org in organizations if api_key.allows_organization(org.name)
        ],
    )


@router.delete("/{github_id}/link", response_model=HistoryResponse)
async def unlink_person(
    github_id: str,
    operations: OperationsDep,
    api_key: UnlinkKey,
) -> HistoryResponse:
    """Delete the corporate link of a GitHub account."""
    account = operations.get_account(github_id)
    history = await account.remove_link()
    logger.info("Unlink requested through API", github_id=github_id, key_name=api_key.name)
    return HistoryResponse(history=history)


@router.post("/{github_id}/terminate", response_model=HistoryResponse)
async def terminate_person(
    github_id: str,
    data: TerminateRequest,
    operations: OperationsDep,
    api_key: UnlinkKey,
) -> HistoryResponse:
    """Remove organization memberships, then the corporate link."""
    account = operations.get_account(github_id)
    history = await account.terminate(
        reason=data.reason or f"API termination requested by {api_key.name}",
        continue_on_error=data.continue_on_error,
    )
    return HistoryResponse(history=history)
