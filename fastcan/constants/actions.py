"""Reserved action and subject tags and the HTTP verb table."""

from enum import Enum

# Action tag that stands for every action
MANAGE = "manage"

# Subject tag that stands for every subject
ALL = "all"


class Action(str, Enum):
    """Canonical actions derived from HTTP requests."""

    READ = "read"
    LIST = "list"
    CREATE = "create"
    UPDATE = "update"
    DESTROY = "destroy"
    MANAGE = MANAGE


# Verb -> (action with identifier, action without identifier)
VERB_ACTIONS = {
    "GET": (Action.READ, Action.LIST),
    "POST": (Action.CREATE, Action.CREATE),
    "PUT": (Action.UPDATE, Action.UPDATE),
    "PATCH": (Action.UPDATE, Action.UPDATE),
    "DELETE": (Action.DESTROY, Action.DESTROY),
}


def action_tag(action):
    """Normalize an action tag: enum members collapse to their value."""
    if isinstance(action, Enum):
        return action.value
    return action
