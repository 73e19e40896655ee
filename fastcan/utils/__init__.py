"""Utility functions and classes."""

from .exceptions import *
from .naming import *

__all__ = [
    # Exceptions
    "BaseAuthException",
    "AuthorizationError",
    "NotFoundError",
    "MisconfigurationError",
    # Naming
    "instance_name",
]
