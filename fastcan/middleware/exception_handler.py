"""Exception handlers for authorization errors."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from fastcan.config.settings import settings
from fastcan.utils.exceptions import (
    AuthorizationError,
    BaseAuthException,
    MisconfigurationError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class ExceptionHandlers:
    """Centralized exception handlers for the extension."""

    @staticmethod
    async def base_auth_exception_handler(request: Request, exc: BaseAuthException) -> Response:
        """Handle all authorization exceptions."""

        logger.warning(
            f"Auth exception in {request.method} {request.url}: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "details": exc.details,
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        if isinstance(exc, AuthorizationError) and exc.redirect_to:
            return RedirectResponse(exc.redirect_to, status_code=settings.REDIRECT_STATUS_CODE)

        # Map exception types to HTTP status codes
        status_mapping = {
            AuthorizationError: status.HTTP_403_FORBIDDEN,
            NotFoundError: status.HTTP_404_NOT_FOUND,
            MisconfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
        }

        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        for exc_type, code in status_mapping.items():
            if isinstance(exc, exc_type):
                status_code = code
                break

        return JSONResponse(
            status_code=status_code,
            content={
                "success": False,
                "message": exc.message,
                "error_code": exc.error_code,
                "details": exc.details,
            },
        )

    @staticmethod
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""

        logger.error(
            f"Unexpected error in {request.method} {request.url}: {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__,
            },
            exc_info=True,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Internal server error",
                "error_code": "INTERNAL_ERROR",
                "details": {},
            },
        )


def register_exception_handlers(app: Any) -> None:
    """Register the authorization exception handlers with a FastAPI app."""

    handlers = ExceptionHandlers()

    app.add_exception_handler(BaseAuthException, handlers.base_auth_exception_handler)

    # Catch-all for unexpected errors
    app.add_exception_handler(Exception, handlers.general_exception_handler)
