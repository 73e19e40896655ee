"""Naming helpers shared by the loader and the request glue."""

import re

__all__ = ["instance_name"]

_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def instance_name(model: type) -> str:
    """Conventional lower-case name of a model: ``ProjectTask`` -> ``project_task``."""
    name = model.__qualname__.split(".")[-1]
    return _CAMEL_BOUNDARY.sub(r"\1_\2", name).lower()
