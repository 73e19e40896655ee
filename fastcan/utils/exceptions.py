"""Custom exceptions for the authorization extension."""

from typing import Any, Dict, Optional


class BaseAuthException(Exception):
    """Base exception for authorization errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class AuthorizationError(BaseAuthException):
    """Raised when an ability check denies an action.

    When ``redirect_to`` is set the denial is answered with a redirect
    instead of a 403.
    """

    def __init__(self, message: str = "Access denied", redirect_to: Optional[str] = None, **kwargs):
        kwargs.setdefault("error_code", "ACCESS_DENIED")
        super().__init__(message, **kwargs)
        self.redirect_to = redirect_to


class NotFoundError(BaseAuthException):
    """Raised when a resource cannot be loaded."""

    def __init__(self, message: str = "Resource not found", **kwargs):
        kwargs.setdefault("error_code", "NOT_FOUND")
        super().__init__(message, **kwargs)


class MisconfigurationError(BaseAuthException):
    """Raised when the extension is wired up incorrectly."""

    def __init__(self, message: str = "Authorization is misconfigured", **kwargs):
        kwargs.setdefault("error_code", "MISCONFIGURED")
        super().__init__(message, **kwargs)
