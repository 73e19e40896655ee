"""Authorization dependencies for FastAPI routes."""

import logging
import re
from collections.abc import Iterable
from typing import Any, Optional

from fastapi import Depends, Request

from fastcan.config.settings import settings
from fastcan.policies.ability import Ability
from fastcan.policies.loader import ResourceLoader, ResourceRequest
from fastcan.repositories.base import BaseRepository
from fastcan.utils.exceptions import NotFoundError
from fastcan.utils.naming import instance_name

from .database import get_repository

logger = logging.getLogger(__name__)

__all__ = ["get_ability", "load_and_authorize", "authorize", "request_params"]

_BRACKET_KEY = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])+)$")

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_ability(request: Request) -> Ability:
    """
    Get the ability of the current request.

    The ability is normally created by AbilityMiddleware; without the
    middleware an empty one is created on first use.
    """
    ability = getattr(request.state, "ability", None)
    if ability is None:
        ability = Ability(not_auth=settings.NOT_AUTH_REDIRECT)
        request.state.ability = ability
    return ability


def nest_params(items: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """
    Expand bracket notation keys into nested dicts.

    ``[("project[name]", "x"), ("page", "2")]`` becomes
    ``{"project": {"name": "x"}, "page": "2"}``.
    """
    params: dict[str, Any] = {}
    for key, value in items:
        match = _BRACKET_KEY.match(key)
        if not match:
            params[key] = value
            continue

        path = [match.group(1)] + re.findall(r"\[([^\[\]]*)\]", match.group(2))
        target = params
        for part in path[:-1]:
            nested = target.get(part)
            if not isinstance(nested, dict):
                nested = {}
                target[part] = nested
            target = nested
        target[path[-1]] = value
    return params


async def request_params(request: Request) -> dict[str, Any]:
    """Query parameters merged with the submitted JSON or form body."""
    params = nest_params(request.query_params.multi_items())

    if request.method not in ("POST", "PUT", "PATCH", "DELETE"):
        return params

    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            body = await request.json() if await request.body() else {}
            if not isinstance(body, dict):
                raise ValueError("JSON body must be an object")
            params.update(body)
        elif content_type.startswith(_FORM_TYPES):
            form = await request.form()
            params.update(nest_params(form.multi_items()))
    except Exception as e:
        logger.warning(
            f"Malformed request body: {e}",
            extra={"path": request.url.path, "method": request.method},
        )
        raise NotFoundError("Resource not found") from e

    return params


def load_and_authorize(
    model: Any,
    not_auth: Optional[str] = None,
    id_param: Optional[str] = None,
):
    """
    Dependency factory that loads and authorizes a resource for a route.

    The canonical action comes from the request verb; the identifier from
    the ``id_param`` path parameter, then the query string. The result is
    returned and bound to ``request.state.<instance name>``.

    Usage:
        @router.get("/projects/{id}")
        async def show_project(project: Project = Depends(load_and_authorize(Project))):
            return project

        @router.get("/projects", dependencies=[Depends(load_and_authorize(Project))])
        async def list_projects(request: Request):
            return request.state.project
    """
    model_class = model if isinstance(model, type) else type(model)
    slot = instance_name(model_class)

    async def dependency(
        request: Request,
        ability: Ability = Depends(get_ability),
        repository: BaseRepository = Depends(get_repository),
    ) -> Any:
        param = id_param or settings.RESOURCE_ID_PARAM
        identifier = request.path_params.get(param)
        if identifier is None:
            identifier = request.query_params.get(param)

        resource_request = ResourceRequest(
            method=request.method,
            identifier=identifier,
            params=await request_params(request),
        )
        loader = ResourceLoader(ability, repository)
        resource = await loader.load_and_authorize(model_class, resource_request, not_auth=not_auth)

        setattr(request.state, slot, resource)
        return resource

    return dependency


def authorize(action: Any, subject: Any, not_auth: Optional[str] = None):
    """
    Dependency factory that guards a route with an ability check.

    Usage:
        @router.get("/admin", dependencies=[Depends(authorize("admin", ALL))])
        async def admin_dashboard():
            pass
    """
    def dependency(ability: Ability = Depends(get_ability)) -> None:
        ability.authorize(action, subject, not_auth=not_auth)

    return dependency
