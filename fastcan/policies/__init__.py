"""Declarative authorization: rules, matching and decisions."""

from .ability import Ability, PolicyResult
from .conditions import ConditionEvaluator
from .loader import ResourceLoader, ResourceRequest, current_action
from .matcher import Matcher
from .rules import Rule, RuleStore
from .subjects import TypeDescriptor, is_type_subject

__all__ = [
    "Ability",
    "PolicyResult",
    "ConditionEvaluator",
    "Matcher",
    "Rule",
    "RuleStore",
    "TypeDescriptor",
    "is_type_subject",
    "ResourceLoader",
    "ResourceRequest",
    "current_action",
]
