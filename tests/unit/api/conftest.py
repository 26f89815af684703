"""Fixtures for API tests: an app wired to mocks and an in-memory database."""

from unittest.mock import AsyncMock, MagicMock

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from linkportal.domain.services.operations import Operations
from linkportal.infrastructure.api.app import create_app
from linkportal.infrastructure.auth import api_key_service
from linkportal.infrastructure.persistence.database import get_db_session


@pytest_asyncio.fixture
async def session_maker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def create_key(session_maker):
    """Create an API key and return its plaintext value."""

    async def create(apis=("people", "unlink"), orgs="*", name="automation"):
        async with session_maker() as session:
            plaintext, _ = await api_key_service.create_api_key(
                session=session, name=name, apis=list(apis), orgs=orgs
            )
            await session.commit()
        return plaintext

    return create


@pytest_asyncio.fixture
async def operations(settings, insights, link):
    github = MagicMock()
    github.call = AsyncMock(
        return_value={"id": 1001, "login": "jdoe", "avatar_url": "https://avatars.example/u/1001"}
    )
    github.aclose = AsyncMock()
    link_provider = AsyncMock()
    link_provider.get_links.return_value = [link]
    link_provider.get_by_third_party_id.return_value = link
    return Operations(
        settings=settings,
        github=github,
        link_provider=link_provider,
        insights=insights,
        organizations=[],
    )


@pytest_asyncio.fixture
async def app(operations, session_maker):
    app = create_app()
    app.state.operations = operations

    async def override_db_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    return app


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
