"""Registering the authorization extension on a FastAPI app."""

import logging
from typing import Any

from fastapi import FastAPI

from fastcan.middleware.ability_middleware import AbilityMiddleware, RulesCallable
from fastcan.middleware.exception_handler import register_exception_handlers
from fastcan.utils.exceptions import MisconfigurationError

logger = logging.getLogger(__name__)


def register(app: Any, rules: RulesCallable | None = None, not_auth: str | None = None) -> Any:
    """
    Install per-request abilities and the authorization error handlers.

    Usage:
        def define_rules(ability, request):
            ability.allow("read", Project)
            if request.headers.get("X-Role") == "admin":
                ability.allow("manage", ALL)

        app = FastAPI()
        register(app, rules=define_rules, not_auth="/login")
    """
    if not isinstance(app, FastAPI):
        raise MisconfigurationError(
            f"register() needs a FastAPI app, got {type(app).__name__}"
        )

    register_exception_handlers(app)
    app.add_middleware(AbilityMiddleware, rules=rules, not_auth=not_auth)

    logger.info(
        "Authorization extension registered",
        extra={"not_auth": not_auth, "has_rules": rules is not None},
    )
    return app
