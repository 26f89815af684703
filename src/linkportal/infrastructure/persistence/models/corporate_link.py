"""SQLAlchemy model for corporate links."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from linkportal.domain.entities.corporate_link import CorporateLink
from linkportal.infrastructure.persistence.database import Base


class CorporateLinkModel(Base):
    """SQLAlchemy model for the corporate_links table.

    Attributes:
        id: Primary key (UUID string).
        third_party_id: GitHub account id (unique).
        third_party_username: GitHub login at link time.
        third_party_avatar: GitHub avatar URL at link time.
        corporate_id: Corporate directory object id.
        corporate_username: Corporate user principal name.
        corporate_display_name: Corporate display name.
        is_service_account: Whether the link is for a service account.
        created_at: Timestamp when the link was created.
    """

    __tablename__ = "corporate_links"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Link ID (UUID)",
    )
    third_party_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="GitHub account id",
    )
    third_party_username: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="GitHub login at link time",
    )
    third_party_avatar: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        comment="GitHub avatar URL at link time",
    )
    corporate_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Corporate directory object id",
    )
    corporate_username: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Corporate user principal name",
    )
    corporate_display_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Corporate display name",
    )
    is_service_account: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="0",
        comment="Whether the link belongs to a service account",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        comment="Creation timestamp",
    )

    def to_entity(self) -> CorporateLink:
        return CorporateLink(
            corporate_id=self.corporate_id,
            corporate_username=self.corporate_username,
            corporate_display_name=self.corporate_display_name,
            third_party_id=self.third_party_id,
            third_party_username=self.third_party_username,
            third_party_avatar=self.third_party_avatar,
            is_service_account=bool(self.is_service_account),
            created_at=self.created_at,
        )

    @classmethod
    def from_entity(cls, link: CorporateLink) -> "CorporateLinkModel":
        model = cls(
            third_party_id=link.third_party_id,
            third_party_username=link.third_party_username,
            third_party_avatar=link.third_party_avatar,
            corporate_id=link.corporate_id,
            corporate_username=link.corporate_username,
            corporate_display_name=link.corporate_display_name,
            is_service_account=link.is_service_account,
        )
        if link.created_at is not None:
            model.created_at = link.created_at
        return model

    def __repr__(self) -> str:
        return (
            f"<CorporateLink(third_party_id={self.third_party_id}, "
            f"corporate_username={self.corporate_username})>"
        )
