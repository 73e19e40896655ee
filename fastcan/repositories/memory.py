"""In-memory repository."""

from collections.abc import Mapping
from typing import Any, Optional

from fastcan.policies.conditions import ConditionEvaluator

from .base import BaseRepository


class InMemoryRepository(BaseRepository):
    """Keeps entities per model in dicts keyed by their ``id`` attribute."""

    def __init__(self, *entities: Any):
        self._records: dict[type, dict[Any, Any]] = {}
        self.evaluator = ConditionEvaluator()
        for entity in entities:
            self.add(entity)

    def add(self, entity: Any) -> Any:
        """Store an entity under its ``id``."""
        self._records.setdefault(type(entity), {})[entity.id] = entity
        return entity

    async def get(self, model: type, identifier: Any) -> Optional[Any]:
        records = self._records.get(model, {})
        if isinstance(identifier, str) and identifier.isdigit():
            return records.get(int(identifier), records.get(identifier))
        return records.get(identifier)

    async def all(
        self,
        model: type,
        allowed: Mapping[str, Any],
        denied: Mapping[str, Any],
    ) -> list[Any]:
        return [
            entity
            for entity in self._records.get(model, {}).values()
            if self.evaluator.matches(entity, allowed)
            and not (denied and self.evaluator.matches(entity, denied))
        ]

    async def new(self, model: type, fields: Mapping[str, Any]) -> Any:
        return model(**fields)
