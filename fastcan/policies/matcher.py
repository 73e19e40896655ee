"""Rule selection by action and subject."""

from typing import Any

from .rules import Rule, RuleStore


class Matcher:
    """Selects the rules of a store that apply to an action and a subject."""

    def __init__(self, store: RuleStore):
        self.store = store

    def rules_for(self, action: Any, subject: Any) -> list[Rule]:
        """
        Rules covering the action and the subject, latest declared first.

        A rule covers an action when it lists it or ``manage``, and covers a
        subject when one of its descriptors is ``all``, equals the subject,
        or is a supertype of the subject (or of the subject's type).
        """
        return [
            rule
            for rule in reversed(self.store)
            if rule.covers_action(action) and rule.covers_subject(subject)
        ]

    def conditions_for(self, action: Any, subject: Any, allow: bool = True) -> dict[str, Any]:
        """
        Merge the conditions of matching rules of one polarity.

        Rules are folded latest declared first, so on a key clash the
        earliest declared rule's spec wins.
        """
        merged: dict[str, Any] = {}
        for rule in self.rules_for(action, subject):
            if rule.allow == allow:
                merged.update(rule.conditions)
        return merged
