"""FastAPI example application authorized with declared abilities."""

import logging

from fastapi import FastAPI, Request

from fastcan.config.database import get_async_engine
from fastcan.config.settings import settings
from fastcan.constants import ALL, Action
from fastcan.extension import register
from fastcan.models.base import Base
from fastcan.models.project import Project
from fastcan.policies.ability import Ability
from fastcan.routers import projects


def define_rules(ability: Ability, request: Request) -> None:
    """
    Declare the abilities of one request.

    The caller is identified by the ``X-User-Id`` header; ``X-Role: admin``
    grants everything.
    """
    ability.allow(Action.READ, Project, {"is_public": True})

    user_id = request.headers.get("X-User-Id", "")
    if not user_id.isdigit():
        return

    if request.headers.get("X-Role") == "admin":
        ability.allow(Action.MANAGE, ALL)
        return

    user_id = int(user_id)
    ability.allow([Action.READ, Action.LIST, Action.UPDATE, Action.DESTROY], Project, {"owner_id": user_id})
    ability.allow(Action.READ, Project, {"tasks": {"assignee_id": user_id}})
    ability.allow(Action.CREATE, Project, {"owner_id": user_id, "status": "active"})
    ability.deny([Action.LIST, Action.UPDATE, Action.DESTROY], Project, {"status": "archived"})
    ability.allow("report", Project)


def create_app() -> FastAPI:
    """Create the example application."""

    logging.getLogger("fastcan").setLevel(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        description=settings.API_DESCRIPTION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
    )

    register(app, rules=define_rules, not_auth=settings.NOT_AUTH_REDIRECT)

    @app.on_event("startup")
    async def create_tables():
        """Create tables for the example models."""
        async with get_async_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.API_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    app.include_router(
        projects.router,
        prefix=f"{settings.API_PREFIX}/projects",
        tags=["Projects"],
    )

    return app


app = create_app()
