"""Shared fixtures.

Every test gets a fresh in-memory SQLite database, either through the
application lifespan (``client``) or directly (``session``).
"""

from collections.abc import AsyncGenerator, Iterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from productdesk.infrastructure.config import Settings
from productdesk.infrastructure.database import Database
from productdesk.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at an in-memory database."""
    return Settings(database_url=TEST_DATABASE_URL, log_json=False)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create application bound to the test settings."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create test client with the lifespan running."""
    with TestClient(app) as client:
        yield client


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Open a database handle with the schema created."""
    database = Database(TEST_DATABASE_URL)
    await database.create_all()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the test database."""
    async with database.session_factory() as session:
        yield session
