"""Repository for API key database operations."""

from datetime import UTC, datetime

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from linkportal.infrastructure.persistence.models.api_key import APIKeyModel


class APIKeyRepository:
    """Repository for API key database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, api_key: APIKeyModel) -> APIKeyModel:
        """Create a new API key."""
        self.session.add(api_key)
        await self.session.flush()
        return api_key

    async def get_by_hash(self, key_hash: str) -> APIKeyModel | None:
        """Get an active API key by its hash.

        Args:
            key_hash: SHA-256 hash of the API key.

        Returns:
            APIKey model if found, None otherwise.
        """
        result = await self.session.execute(
            select(APIKeyModel).where(
                and_(
                    APIKeyModel.key_hash == key_hash,
                    APIKeyModel.is_active == True,  # noqa: E712
                )
            )
        )
        return result.scalar_one_or_none()

    async def update_last_used(self, key_id: str) -> None:
        """Update the last_used_at timestamp for an API key."""
        await self.session.execute(
            update(APIKeyModel)
            .where(APIKeyModel.id == key_id)
            .values(last_used_at=datetime.now(UTC))
        )
        await self.session.flush()

    async def soft_delete(self, key_id: str) -> bool:
        """Revoke an API key.

        Returns:
            True if revoked, False if not found.
        """
        result = await self.session.execute(
            update(APIKeyModel).where(APIKeyModel.id == key_id).values(is_active=False)
        )
        await self.session.flush()
        return result.rowcount > 0
