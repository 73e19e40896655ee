"""Rule declarations and the per-context rule store."""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

from fastcan.constants import MANAGE, action_tag

from .subjects import TypeDescriptor

Predicate = Callable[..., Any]

_COLLECTION_TYPES = (list, tuple, set, frozenset)


def _as_collection(value: Any) -> list:
    """Normalize a single value or a collection of values to a list."""
    if isinstance(value, _COLLECTION_TYPES):
        return list(value)
    return [value]


@dataclass(frozen=True, eq=False)
class Rule:
    """One allow or deny declaration."""

    allow: bool
    deny: bool
    actions: frozenset
    subjects: tuple[TypeDescriptor, ...]
    conditions: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    predicate: Optional[Predicate] = None

    @classmethod
    def build(
        cls,
        allow: bool,
        actions: Any,
        subjects: Any,
        conditions: Optional[Mapping[str, Any]] = None,
        predicate: Optional[Predicate] = None,
    ) -> "Rule":
        """Create a rule from loosely typed declaration arguments."""
        if predicate is not None and not callable(predicate):
            raise TypeError("Rule predicate must be callable")
        if conditions is not None and not isinstance(conditions, Mapping):
            raise TypeError("Rule conditions must be a mapping")

        return cls(
            allow=allow,
            deny=not allow,
            actions=frozenset(action_tag(action) for action in _as_collection(actions)),
            subjects=tuple(TypeDescriptor.of(subject) for subject in _as_collection(subjects)),
            conditions=MappingProxyType(dict(conditions or {})),
            predicate=predicate,
        )

    @property
    def polarity(self) -> str:
        return "allow" if self.allow else "deny"

    def covers_action(self, action: Any) -> bool:
        if MANAGE in self.actions:
            return True
        try:
            return action_tag(action) in self.actions
        except TypeError:
            # Unhashable tags are never declared
            return False

    def covers_subject(self, subject: Any) -> bool:
        return any(descriptor.accepts(subject) for descriptor in self.subjects)

    def __repr__(self) -> str:
        return (
            f"Rule({self.polarity}, actions={sorted(map(str, self.actions))}, "
            f"subjects={list(self.subjects)}, conditions={dict(self.conditions)}, "
            f"predicate={self.predicate is not None})"
        )


class RuleStore:
    """
    Append-only, insertion-ordered rules of one authorization context.

    A store lives as long as the context that owns it (usually one request)
    and is never shared between contexts.
    """

    def __init__(self):
        self._rules: list[Rule] = []

    def declare_allow(
        self,
        actions: Any,
        subjects: Any,
        conditions: Optional[Mapping[str, Any]] = None,
        predicate: Optional[Predicate] = None,
    ) -> Rule:
        """Append an allow rule."""
        return self._append(Rule.build(True, actions, subjects, conditions, predicate))

    def declare_deny(
        self,
        actions: Any,
        subjects: Any,
        conditions: Optional[Mapping[str, Any]] = None,
        predicate: Optional[Predicate] = None,
    ) -> Rule:
        """Append a deny rule."""
        return self._append(Rule.build(False, actions, subjects, conditions, predicate))

    def _append(self, rule: Rule) -> Rule:
        self._rules.append(rule)
        return rule

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(tuple(self._rules))

    def __reversed__(self) -> Iterator[Rule]:
        return reversed(tuple(self._rules))

    def __len__(self) -> int:
        return len(self._rules)
