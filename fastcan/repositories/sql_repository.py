"""SQLAlchemy repository."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from sqlalchemy import inspect, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fastcan.policies.conditions import ConditionEvaluator

from .base import BaseRepository

logger = logging.getLogger(__name__)


class SQLAlchemyRepository(BaseRepository):
    """
    Repository over an async SQLAlchemy session.

    Top-level literal, collection and range specs on mapped columns are
    compiled into the query. Nested specs and the deny exclusion are
    evaluated on the fetched rows.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.evaluator = ConditionEvaluator()

    async def get(self, model: type, identifier: Any) -> Optional[Any]:
        primary_key = inspect(model).primary_key[0]
        python_type = primary_key.type.python_type
        if not isinstance(identifier, python_type):
            identifier = python_type(identifier)
        return await self.session.get(model, identifier)

    async def all(
        self,
        model: type,
        allowed: Mapping[str, Any],
        denied: Mapping[str, Any],
    ) -> list[Any]:
        columns = inspect(model).columns
        query = select(model)
        remaining: dict[str, Any] = {}

        for name, spec in allowed.items():
            clause = self._clause(model, columns, name, spec)
            if clause is None:
                remaining[name] = spec
            else:
                query = query.where(clause)

        result = await self.session.execute(query)
        entities = result.scalars().all()

        logger.debug(
            f"Loaded {len(entities)} {model.__name__} rows",
            extra={
                "model": model.__name__,
                "sql_conditions": sorted(set(allowed) - set(remaining)),
                "python_conditions": sorted(remaining),
            },
        )

        return [
            entity
            for entity in entities
            if self.evaluator.matches(entity, remaining)
            and not (denied and self.evaluator.matches(entity, denied))
        ]

    async def new(self, model: type, fields: Mapping[str, Any]) -> Any:
        return model(**fields)

    def identity_fields(self, model: type) -> tuple[str, ...]:
        mapper = inspect(model)
        return tuple(mapper.get_property_by_column(column).key for column in mapper.primary_key)

    def _clause(self, model: type, columns: Any, name: str, spec: Any) -> Optional[Any]:
        """SQL clause for a spec, or None when it must be evaluated in Python."""
        if name not in columns or isinstance(spec, Mapping):
            return None

        column = getattr(model, name)
        if isinstance(spec, range):
            # BETWEEN would also accept fractional values
            if not issubclass(self._python_type(columns[name]), int):
                return None
            if spec.step == 1:
                if len(spec) == 0:
                    return column.in_([])
                return column.between(spec.start, spec.stop - 1)
            return column.in_(list(spec))
        if isinstance(spec, (list, tuple, set, frozenset)):
            values = [value for value in spec if value is not None]
            if len(values) == len(spec):
                return column.in_(values)
            # IN never matches NULL
            return or_(column.in_(values), column.is_(None))
        if spec is None:
            return column.is_(None)
        return column == spec

    @staticmethod
    def _python_type(column: Any) -> type:
        try:
            return column.type.python_type
        except NotImplementedError:
            return object
