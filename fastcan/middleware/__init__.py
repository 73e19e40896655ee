"""Middleware package."""

from .ability_middleware import AbilityMiddleware
from .exception_handler import ExceptionHandlers, register_exception_handlers

__all__ = [
    "AbilityMiddleware",
    "ExceptionHandlers",
    "register_exception_handlers",
]
