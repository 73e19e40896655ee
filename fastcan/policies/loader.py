"""Loading resources and authorizing them in one step."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from fastcan.constants import VERB_ACTIONS, Action
from fastcan.repositories.base import BaseRepository
from fastcan.utils.exceptions import AuthorizationError, MisconfigurationError, NotFoundError
from fastcan.utils.naming import instance_name

from .ability import Ability
from .conditions import is_literal

logger = logging.getLogger(__name__)


def current_action(method: str, has_identifier: bool) -> Optional[Action]:
    """Canonical action of a request, or None for verbs outside the table."""
    actions = VERB_ACTIONS.get(method.upper())
    if actions is None:
        return None
    with_identifier, without_identifier = actions
    return with_identifier if has_identifier else without_identifier


@dataclass
class ResourceRequest:
    """The parts of an inbound request the loader needs."""

    method: str
    identifier: Optional[Any] = None
    params: Mapping[str, Any] = field(default_factory=dict)

    @property
    def has_identifier(self) -> bool:
        return self.identifier is not None and self.identifier != ""

    @property
    def action(self) -> Optional[Action]:
        return current_action(self.method, self.has_identifier)


class ResourceLoader:
    """
    Loads or builds the resource a request targets and authorizes it.

    Usage:
        loader = ResourceLoader(ability, SQLAlchemyRepository(db))
        project = await loader.load_and_authorize(
            Project, ResourceRequest("PUT", "7", {"project": {"name": "New"}})
        )
    """

    def __init__(self, ability: Ability, repository: BaseRepository):
        self.ability = ability
        self.repository = repository

    async def load_and_authorize(
        self,
        model: Any,
        request: ResourceRequest,
        not_auth: Optional[str] = None,
    ) -> Any:
        """
        Load (or build) and authorize the resource targeted by a request.

        - with an identifier: fetch one entity by identifier
        - ``list``: fetch the entities the allow conditions select, minus
          those the deny conditions select
        - ``create``: build an unsaved entity from the allow conditions

        Submitted fields under the model's conventional name are assigned
        onto a loaded or built entity before the final authorization. The
        repository's identity fields are never assigned.

        Returns the entity, or the collection for ``list``.

        Raises:
            AuthorizationError: the final check denies the action
            NotFoundError: the entity is missing or loading failed
        """
        if not isinstance(model, type):
            if model is None:
                raise MisconfigurationError("load_and_authorize needs a model class or instance")
            model = type(model)

        name = instance_name(model)
        action = request.action
        allowed = self.ability.conditions_for(action, model)
        denied = self.ability.conditions_for(action, model, allow=False)

        try:
            instance = None
            collection = None

            if request.has_identifier:
                instance = await self.repository.get(model, request.identifier)
                if instance is None:
                    raise NotFoundError(
                        f"{model.__name__} not found",
                        details={"identifier": str(request.identifier)},
                    )
            elif action == Action.LIST:
                collection = await self.repository.all(model, allowed, denied)
            elif action == Action.CREATE:
                preloaded = {key: value for key, value in allowed.items() if is_literal(value)}
                instance = await self.repository.new(model, preloaded)

            fields = request.params.get(name)
            if fields and instance is not None:
                identity = self.repository.identity_fields(model)
                for key, value in fields.items():
                    if key in identity:
                        logger.debug(
                            f"Ignoring submitted identity field {key}",
                            extra={"model": model.__name__, "field": key},
                        )
                        continue
                    setattr(instance, key, value)

            self.ability.authorize(
                action, instance if instance is not None else model, not_auth=not_auth
            )
        except (AuthorizationError, NotFoundError):
            raise
        except Exception as e:
            logger.warning(
                f"Failed to load {name}: {e}",
                extra={
                    "model": model.__name__,
                    "method": request.method,
                    "error_type": type(e).__name__,
                },
            )
            raise NotFoundError(f"{model.__name__} not found") from e

        return instance if instance is not None else collection
