"""Configuration module."""

from .database import get_async_engine, get_async_session_local, reset_engines
from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
    "get_async_engine",
    "get_async_session_local",
    "reset_engines",
]
