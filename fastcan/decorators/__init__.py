"""Decorators package."""

from .permissions import require_ability

__all__ = [
    "require_ability",
]
