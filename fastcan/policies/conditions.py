"""Condition matching against subject instances."""

from collections.abc import Mapping
from typing import Any

# Specs tested by membership
MEMBERSHIP_TYPES = (list, tuple, set, frozenset, range)

# Attribute values that a nested spec fans out over
SEQUENCE_TYPES = (list, tuple, set, frozenset)


class _Absent:
    """Marker for an attribute the subject does not have."""

    def __repr__(self) -> str:
        return "<absent>"


ABSENT = _Absent()


def read_attribute(subject: Any, name: str) -> Any:
    """Read a named attribute from a mapping or an object."""
    if isinstance(subject, Mapping):
        return subject.get(name, ABSENT)
    return getattr(subject, name, ABSENT)


def is_literal(spec: Any) -> bool:
    """Check if a spec is a plain value rather than a membership or nested spec."""
    return not isinstance(spec, (Mapping, *MEMBERSHIP_TYPES))


class ConditionEvaluator:
    """
    Tests subject instances against condition mappings.

    A condition mapping pairs attribute names with specs:

    - a nested mapping matches the attribute's value recursively; when the
      value is a sequence, at least one element must match;
    - a list, tuple, set, frozenset or range matches by membership;
    - anything else matches by equality.

    Every pair must match. An empty mapping always matches.
    """

    def matches(self, subject: Any, conditions: Mapping[str, Any]) -> bool:
        return all(
            self._matches_spec(read_attribute(subject, name), spec)
            for name, spec in conditions.items()
        )

    def _matches_spec(self, attribute: Any, spec: Any) -> bool:
        if attribute is ABSENT:
            return False

        if isinstance(spec, Mapping):
            if isinstance(attribute, SEQUENCE_TYPES):
                return any(self.matches(element, spec) for element in attribute)
            return attribute is not None and self.matches(attribute, spec)

        if isinstance(spec, MEMBERSHIP_TYPES):
            try:
                return attribute in spec
            except TypeError:
                # Unhashable values are never members of a set
                return False

        return attribute == spec
