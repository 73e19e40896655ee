"""Test configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fastcan.config.settings import settings
from fastcan.policies.ability import Ability


@pytest.fixture
def ability() -> Ability:
    """Fresh ability for one test."""
    return Ability()


# Database per test
@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[None, None]:
    """Point the app at a fresh SQLite file and create the tables."""
    from fastcan.config.database import get_async_engine, reset_engines
    from fastcan.models.base import Base

    original_url = settings.DATABASE_URL
    settings.TESTING = True
    settings.DATABASE_URL = f"sqlite+aiosqlite:///{tmp_path}/test.db"
    reset_engines()

    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    await engine.dispose()
    settings.DATABASE_URL = original_url
    reset_engines()


@pytest_asyncio.fixture
async def db_session(database):
    """Create async database session for testing."""
    from fastcan.config.database import get_async_session_local

    session_local = get_async_session_local()
    async with session_local() as session:
        yield session


# Async test client
@pytest_asyncio.fixture
async def async_client(database) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for the example app."""
    from fastcan.main import create_app

    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
