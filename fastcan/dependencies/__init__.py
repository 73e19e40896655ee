"""FastAPI dependencies."""

from .ability import *
from .database import *

__all__ = [
    "get_ability",
    "load_and_authorize",
    "authorize",
    "request_params",
    "get_db",
    "get_repository",
]
