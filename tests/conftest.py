"""Shared pytest fixtures."""

from collections.abc import AsyncIterator, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from tunelist.config import Settings
from tunelist.infrastructure.persistence import Database
from tunelist.main import create_app


# Hey future me - every test gets a FRESH in-memory SQLite database. Database() switches to
# StaticPool for :memory: URLs, so all sessions of one test see the same tables.
@pytest.fixture
def settings() -> Settings:
    """Settings pointing at an in-memory database."""
    return Settings(
        _env_file=None,
        app_env="testing",
        log_level="WARNING",
        database={"url": "sqlite+aiosqlite:///:memory:"},
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """HTTP client for the full app; the lifespan creates the tables."""
    app = create_app(settings)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
async def db(settings: Settings) -> AsyncIterator[Database]:
    """Database with all tables created."""
    database = Database(settings)
    await database.create_tables()
    yield database
    await database.close()


@pytest.fixture
async def session(db: Database) -> AsyncIterator[AsyncSession]:
    """Session committed at the end of the test."""
    async with db.session_scope() as db_session:
        yield db_session
