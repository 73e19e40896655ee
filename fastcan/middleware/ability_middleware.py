"""Per-request ability middleware for FastAPI."""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from fastcan.config.settings import settings
from fastcan.policies.ability import Ability
from fastcan.utils.exceptions import BaseAuthException

from .exception_handler import ExceptionHandlers

logger = logging.getLogger(__name__)

# Declares the rules of one request: rules(ability, request)
RulesCallable = Callable[[Ability, Request], Any]


class AbilityMiddleware(BaseHTTPMiddleware):
    """Middleware that gives every request its own ability."""

    def __init__(
        self,
        app: Any,
        rules: RulesCallable | None = None,
        not_auth: str | None = None,
    ):
        """
        Initialize ability middleware.

        Args:
            app: ASGI application
            rules: Callable (sync or async) declaring the request's rules
            not_auth: Redirect target for denials; defaults to settings.NOT_AUTH_REDIRECT
        """
        super().__init__(app)
        self.rules = rules
        self.not_auth = not_auth

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Create the request's ability and declare its rules."""

        ability = Ability(not_auth=self.not_auth or settings.NOT_AUTH_REDIRECT)
        request.state.ability = ability

        if self.rules is not None:
            try:
                declared = self.rules(ability, request)
                if inspect.isawaitable(declared):
                    await declared
            except BaseAuthException as e:
                return await ExceptionHandlers.base_auth_exception_handler(request, e)

        logger.debug(
            f"Declared {len(ability.store)} rules",
            extra={
                "path": request.url.path,
                "method": request.method,
                "rule_count": len(ability.store),
            },
        )

        return await call_next(request)
