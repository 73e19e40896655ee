"""Constants package."""

from .actions import ALL, MANAGE, VERB_ACTIONS, Action, action_tag

__all__ = [
    "ALL",
    "MANAGE",
    "VERB_ACTIONS",
    "Action",
    "action_tag",
]
