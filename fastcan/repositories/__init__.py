"""Persistence collaborators used by the resource loader."""

from .base import BaseRepository
from .memory import InMemoryRepository
from .sql_repository import SQLAlchemyRepository

__all__ = [
    "BaseRepository",
    "InMemoryRepository",
    "SQLAlchemyRepository",
]
