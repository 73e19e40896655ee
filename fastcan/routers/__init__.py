"""API routers."""

from . import projects

__all__ = ["projects"]
