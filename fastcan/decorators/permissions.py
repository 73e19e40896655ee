"""Permission decorators for route protection."""

from functools import wraps
from typing import Any, Callable, Optional

from fastapi import Request

from fastcan.dependencies.ability import get_ability
from fastcan.utils.exceptions import MisconfigurationError


def require_ability(
    action: Any,
    subject: Any = None,
    subject_param: Optional[str] = None,
    not_auth: Optional[str] = None,
):
    """
    Decorator to authorize a route against the request's ability.

    The endpoint must accept a ``request: Request`` parameter. The subject is
    either given directly or taken from the endpoint argument named by
    ``subject_param``.

    Usage:
        @router.get("/admin")
        @require_ability("admin", ALL)
        async def admin_dashboard(request: Request):
            pass

        @router.post("/projects/{project_id}/archive")
        @require_ability("archive", subject_param="project")
        async def archive(request: Request, project: Project = Depends(get_project)):
            pass
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request: Request = kwargs.get("request")
            if request is None:
                raise MisconfigurationError(
                    f"{func.__name__} needs a 'request' parameter to be authorized"
                )

            target = kwargs.get(subject_param) if subject_param else subject
            get_ability(request).authorize(action, target, not_auth=not_auth)

            return await func(*args, **kwargs)

        return wrapper
    return decorator
