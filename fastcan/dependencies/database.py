"""Database dependencies for FastAPI."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fastcan.config.database import get_async_session_local
from fastcan.repositories.base import BaseRepository
from fastcan.repositories.sql_repository import SQLAlchemyRepository

__all__ = ["get_db", "get_repository"]


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    session_local = get_async_session_local()
    async with session_local() as session:
        try:
            yield session
        finally:
            await session.close()


async def get_repository(db: AsyncSession = Depends(get_db)) -> BaseRepository:
    """Get the repository the resource loader fetches entities through."""
    return SQLAlchemyRepository(db)
