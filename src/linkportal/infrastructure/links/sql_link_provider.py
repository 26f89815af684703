"""Link provider backed by the corporate_links table."""

from sqlalchemy.exc import IntegrityError

from linkportal.core.errors import LinkNotFoundError, LinkPortalError
from linkportal.core.logging import get_logger
from linkportal.domain.entities.corporate_link import CorporateLink
from linkportal.infrastructure.links.base import LinkProvider
from linkportal.infrastructure.persistence.database import DatabaseManager
from linkportal.infrastructure.persistence.models.corporate_link import CorporateLinkModel
from linkportal.infrastructure.persistence.repositories.link_repository import LinkRepository

logger = get_logger(__name__)


class SqlLinkProvider(LinkProvider):
    """Stores links through SQLAlchemy, one session per call."""

    def __init__(self, db: DatabaseManager) -> None:
        self.db = db

    async def get_links(self) -> list[CorporateLink]:
        async with self.db.session() as session:
            models = await LinkRepository(session).list_all()
            return [model.to_entity() for model in models]

    async def get_by_third_party_id(self, third_party_id: str) -> CorporateLink | None:
        async with self.db.session() as session:
            model = await LinkRepository(session).get_by_third_party_id(third_party_id)
            return model.to_entity() if model else None

    async def create_link(self, link: CorporateLink) -> CorporateLink:
        async with self.db.session() as session:
            try:
                model = await LinkRepository(session).create(CorporateLinkModel.from_entity(link))
                await session.commit()
            except IntegrityError as e:
                raise LinkPortalError(
                    f"A link already exists for GitHub account {link.third_party_id}",
                    status_code=409,
                ) from e
            logger.info(
                "Link created",
                github_id=link.third_party_id,
                corporate_id=link.corporate_id,
            )
            return model.to_entity()

    async def delete_link(self, link: CorporateLink) -> None:
        async with self.db.session() as session:
            deleted = await LinkRepository(session).delete_by_third_party_id(link.third_party_id)
            if not deleted:
                raise LinkNotFoundError(
                    f"No link found for GitHub account {link.third_party_id}"
                )
            await session.commit()
        logger.info(
            "Link deleted",
            github_id=link.third_party_id,
            corporate_id=link.corporate_id,
        )
