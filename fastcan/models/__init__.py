"""Database models."""

from .base import Base
from .project import Project, Task

__all__ = [
    "Base",
    "Project",
    "Task",
]
