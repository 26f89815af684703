"""Pytest configuration for unit tests."""

from typing import AsyncGenerator
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from linkportal.core.config import Settings
from linkportal.domain.entities.corporate_link import CorporateLink
from linkportal.domain.entities.organization_membership import OrganizationMembership
from linkportal.infrastructure.persistence import models  # noqa: F401
from linkportal.infrastructure.persistence.database import Base


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and .env files."""
    return Settings(
        _env_file=None,
        environment="testing",
        github_token="central-token",
        organizations=[],
        database_url="sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
def insights() -> MagicMock:
    """Telemetry sink recording every call."""
    return MagicMock()


@pytest.fixture
def link() -> CorporateLink:
    return CorporateLink(
        corporate_id="aad-1",
        corporate_username="jdoe@contoso.com",
        corporate_display_name="Jane Doe",
        third_party_id="1001",
        third_party_username="jdoe",
    )


class FakeOrganization:
    """In-memory organization handle.

    ``calls`` is shared between organizations of one test so the global call
    order can be asserted.
    """

    def __init__(
        self,
        name: str,
        state: str | None = "active",
        lookup_error: Exception | None = None,
        remove_error: Exception | None = None,
        calls: list | None = None,
    ) -> None:
        self.name = name
        self.state = state
        self.lookup_error = lookup_error
        self.remove_error = remove_error
        self.calls = calls if calls is not None else []

    async def get_operational_membership(self, username: str):
        self.calls.append(("lookup", self.name, username))
        if self.lookup_error is not None:
            raise self.lookup_error
        if self.state is None:
            return None
        return OrganizationMembership(self.name, username, state=self.state)

    async def remove_member(self, username: str) -> None:
        self.calls.append(("remove", self.name, username))
        if self.remove_error is not None:
            raise self.remove_error


@pytest.fixture
def make_organization():
    return FakeOrganization


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
        await session.rollback()
