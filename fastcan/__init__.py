"""Declarative, per-request permission checks for FastAPI applications."""

from fastcan.constants import ALL, MANAGE, Action
from fastcan.dependencies.ability import authorize, get_ability, load_and_authorize
from fastcan.extension import register
from fastcan.policies import (
    Ability,
    ConditionEvaluator,
    Matcher,
    PolicyResult,
    ResourceLoader,
    ResourceRequest,
    Rule,
    RuleStore,
    TypeDescriptor,
)
from fastcan.repositories import BaseRepository, InMemoryRepository, SQLAlchemyRepository
from fastcan.utils.exceptions import AuthorizationError, MisconfigurationError, NotFoundError

__version__ = "1.0.0"

__all__ = [
    "ALL",
    "MANAGE",
    "Action",
    "Ability",
    "PolicyResult",
    "Rule",
    "RuleStore",
    "TypeDescriptor",
    "Matcher",
    "ConditionEvaluator",
    "ResourceLoader",
    "ResourceRequest",
    "BaseRepository",
    "InMemoryRepository",
    "SQLAlchemyRepository",
    "AuthorizationError",
    "NotFoundError",
    "MisconfigurationError",
    "get_ability",
    "load_and_authorize",
    "authorize",
    "register",
]
