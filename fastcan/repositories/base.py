"""Base repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional


class BaseRepository(ABC):
    """Fetches and builds entities for the resource loader."""

    @abstractmethod
    async def get(self, model: type, identifier: Any) -> Optional[Any]:
        """Fetch one entity by identifier, or None."""
        pass

    @abstractmethod
    async def all(
        self,
        model: type,
        allowed: Mapping[str, Any],
        denied: Mapping[str, Any],
    ) -> list[Any]:
        """
        Fetch the entities matching ``allowed`` that do not match ``denied``.

        An empty ``allowed`` mapping selects every entity; an empty
        ``denied`` mapping excludes none.
        """
        pass

    @abstractmethod
    async def new(self, model: type, fields: Mapping[str, Any]) -> Any:
        """Build an unsaved entity populated with ``fields``."""
        pass

    def identity_fields(self, model: type) -> tuple[str, ...]:
        """Attribute names that identify an entity and are never assigned from a request."""
        return ("id",)
