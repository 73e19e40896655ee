"""Subject type descriptors."""

from typing import Any

from fastcan.constants import ALL


def is_type_subject(subject: Any) -> bool:
    """Check if a subject is a bare type rather than an instance."""
    return isinstance(subject, type)


class TypeDescriptor:
    """
    A declared rule subject with an assignability query.

    Wraps a class, a symbolic tag (e.g. ``"dashboard"``) or the ``ALL``
    wildcard. Classes accept their subclasses and instances of them,
    including virtual subclasses registered on an ABC.
    """

    __slots__ = ("target",)

    def __init__(self, target: Any):
        self.target = target

    @classmethod
    def of(cls, target: Any) -> "TypeDescriptor":
        if isinstance(target, cls):
            return target
        return cls(target)

    @property
    def is_wildcard(self) -> bool:
        return not is_type_subject(self.target) and self.target == ALL

    def accepts(self, subject: Any) -> bool:
        """Check if a subject (instance or type) falls under this descriptor."""
        if self.is_wildcard or subject is self.target:
            return True

        if is_type_subject(self.target):
            if is_type_subject(subject):
                return issubclass(subject, self.target)
            return isinstance(subject, self.target)

        # Symbolic tags only match by value
        return not is_type_subject(subject) and subject == self.target

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, TypeDescriptor):
            return self.target == other.target
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.target)

    def __repr__(self) -> str:
        name = getattr(self.target, "__qualname__", None) or repr(self.target)
        return f"TypeDescriptor({name})"
