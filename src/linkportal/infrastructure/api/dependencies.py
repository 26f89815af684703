"""FastAPI dependencies for API versioning and API key authorization."""

from typing import Annotated, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from linkportal.core.config import get_settings
from linkportal.core.errors import LinkPortalError
from linkportal.core.logging import get_logger
from linkportal.domain.services.operations import Operations
from linkportal.infrastructure.auth import api_key_service
from linkportal.infrastructure.persistence.database import get_db_session
from linkportal.infrastructure.persistence.models import APIKeyModel

logger = get_logger(__name__)

API_VERSION_PARAMETER = "api-version"


def require_api_version(request: Request) -> str:
    """Validate the api-version query parameter or header.

    Returns:
        The requested API version.

    Raises:
        LinkPortalError: 422 when the version is missing, retired or unsupported.
    """
    settings = get_settings()
    api_version = request.query_params.get(API_VERSION_PARAMETER) or request.headers.get(
        API_VERSION_PARAMETER
    )
    if not api_version:
        raise LinkPortalError(
            "This endpoint requires that an API Version be provided.", status_code=422
        )

    requested = api_version.lower()
    if requested in (version.lower() for version in settings.retired_api_versions):
        raise LinkPortalError(
            "This endpoint no longer supports the original preview version. "
            "Please update your client to use a newer version such as "
            f"{settings.supported_api_versions[0]}",
            status_code=422,
        )
    if requested not in (version.lower() for version in settings.supported_api_versions):
        raise LinkPortalError(
            "This endpoint does not support the API version you provided at this time.",
            status_code=422,
        )
    request.state.api_version = api_version
    return api_version


async def get_api_key(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> APIKeyModel:
    """Authenticate the request by its API key header.

    Raises:
        LinkPortalError: 401 when the key is missing or unknown.
    """
    settings = get_settings()
    key = request.headers.get(settings.api_key_header)
    if not key:
        logger.info("Authentication failed: missing API key")
        raise LinkPortalError("No API key provided", status_code=401)

    api_key = await api_key_service.authenticate(session, key)
    if api_key is None:
        logger.info("Authentication failed: unknown API key")
        raise LinkPortalError("Key not authorized", status_code=401)
    await session.commit()

    request.state.api_key_name = api_key.name
    return api_key


AuthenticatedKey = Annotated[APIKeyModel, Depends(get_api_key)]


def require_api(api: str) -> Callable:
    """Dependency factory requiring the key to be scoped to ``api``."""

    async def check_api(api_key: AuthenticatedKey) -> APIKeyModel:
        if not api_key.apis:
            raise LinkPortalError("The key is not authorized for specific APIs", status_code=401)
        if not api_key.allows_api(api):
            logger.info("API key scope denied", key_name=api_key.name, api=api)
            raise LinkPortalError(
                f"The key is not authorized to use the {api} APIs", status_code=401
            )
        return api_key

    return check_api


def get_operations(request: Request) -> Operations:
    """Get the Operations facade from app state."""
    return request.app.state.operations


OperationsDep = Annotated[Operations, Depends(get_operations)]
