"""SQLAlchemy model for API keys.

API keys grant programmatic access to the people APIs. Only SHA-256 hashes
are stored.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from linkportal.infrastructure.persistence.database import Base


class APIKeyModel(Base):
    """SQLAlchemy model for the api_keys table.

    Attributes:
        id: Primary key (UUID string).
        key_hash: SHA-256 hash of the API key.
        name: Human-readable name for the key.
        apis: Comma-separated API scopes ("people,unlink").
        orgs: "*" or comma-separated organization names.
        is_active: Whether the key is active (soft delete).
        last_used_at: Timestamp of last successful usage.
        created_at: Timestamp when the key was created.
    """

    __tablename__ = "api_keys"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="API key ID (UUID)",
    )
    key_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="SHA-256 hash of the API key",
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Human-readable name for the API key",
    )
    apis: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Comma-separated API scopes",
    )
    orgs: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        comment="'*' or comma-separated organization names",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="1",
        comment="Whether the API key is active (soft delete)",
    )
    last_used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Timestamp of last successful usage",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        comment="Creation timestamp",
    )

    @property
    def api_list(self) -> list[str]:
        return [api.strip().lower() for api in (self.apis or "").split(",") if api.strip()]

    def allows_api(self, api: str) -> bool:
        return api.lower() in self.api_list

    def allows_organization(self, organization: str) -> bool:
        if not self.orgs:
            return False
        if self.orgs.strip() == "*":
            return True
        allowed = [org.strip().lower() for org in self.orgs.split(",")]
        return organization.lower() in allowed

    def __repr__(self) -> str:
        return f"<APIKey(id={self.id}, name={self.name})>"
