"""Repository for corporate link database operations."""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from linkportal.infrastructure.persistence.models.corporate_link import CorporateLinkModel


class LinkRepository:
    """Repository for corporate link database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, link: CorporateLinkModel) -> CorporateLinkModel:
        """Create a new link.

        Args:
            link: Link model to create.

        Returns:
            Created link model.
        """
        self.session.add(link)
        await self.session.flush()
        return link

    async def get_by_third_party_id(self, third_party_id: str) -> CorporateLinkModel | None:
        """Get a link by GitHub account id.

        Args:
            third_party_id: GitHub account id.

        Returns:
            Link model if found, None otherwise.
        """
        result = await self.session.execute(
            select(CorporateLinkModel).where(
                CorporateLinkModel.third_party_id == third_party_id
            )
        )
        return result.scalar_one_or_none()

    async def get_by_corporate_id(self, corporate_id: str) -> Sequence[CorporateLinkModel]:
        """List links for a corporate identity.

        Args:
            corporate_id: Corporate directory object id.

        Returns:
            Links belonging to the corporate identity.
        """
        result = await self.session.execute(
            select(CorporateLinkModel)
            .where(CorporateLinkModel.corporate_id == corporate_id)
            .order_by(CorporateLinkModel.created_at)
        )
        return result.scalars().all()

    async def list_all(self) -> Sequence[CorporateLinkModel]:
        """List every link."""
        result = await self.session.execute(
            select(CorporateLinkModel).order_by(CorporateLinkModel.third_party_id)
        )
        return result.scalars().all()

    async def delete_by_third_party_id(self, third_party_id: str) -> bool:
        """Delete the link for a GitHub account.

        Args:
            third_party_id: GitHub account id.

        Returns:
            True if a link was deleted, False if none matched.
        """
        result = await self.session.execute(
            delete(CorporateLinkModel).where(
                CorporateLinkModel.third_party_id == third_party_id
            )
        )
        await self.session.flush()
        return result.rowcount > 0
