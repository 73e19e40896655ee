"""Allow/deny decisions over a per-context rule store."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from fastcan.constants import action_tag
from fastcan.utils.exceptions import AuthorizationError

from .conditions import ConditionEvaluator
from .matcher import Matcher
from .rules import Predicate, Rule, RuleStore
from .subjects import is_type_subject

logger = logging.getLogger(__name__)


@dataclass
class PolicyResult:
    """Result of an ability check."""

    allowed: bool
    reason: Optional[str] = None
    rule: Optional[Rule] = None

    @classmethod
    def allow(cls, rule: Rule, reason: Optional[str] = None) -> "PolicyResult":
        """Create an allow result."""
        return cls(allowed=True, reason=reason, rule=rule)

    @classmethod
    def deny(cls, reason: str, rule: Optional[Rule] = None) -> "PolicyResult":
        """Create a deny result."""
        return cls(allowed=False, reason=reason, rule=rule)


class Ability:
    """
    Declared abilities of one authorization context.

    Usage:
        ability = Ability()
        ability.allow("manage", Project, {"owner_id": user.id})
        ability.deny("destroy", Project, {"status": "archived"})

        ability.can("update", project)
        ability.authorize("destroy", project, not_auth="/login")
    """

    def __init__(self, not_auth: Optional[str] = None, store: Optional[RuleStore] = None):
        """
        Args:
            not_auth: Context-wide redirect target for denied ``authorize`` calls
            store: Rule store to decide over; a fresh one by default
        """
        self.not_auth = not_auth
        self.store = store if store is not None else RuleStore()
        self.matcher = Matcher(self.store)
        self.evaluator = ConditionEvaluator()

    # Declarations

    def allow(
        self,
        actions: Any,
        subjects: Any,
        conditions: Optional[Mapping[str, Any]] = None,
        predicate: Optional[Predicate] = None,
    ) -> Rule:
        """Declare that actions may be done on subjects."""
        return self.store.declare_allow(actions, subjects, conditions, predicate)

    def deny(
        self,
        actions: Any,
        subjects: Any,
        conditions: Optional[Mapping[str, Any]] = None,
        predicate: Optional[Predicate] = None,
    ) -> Rule:
        """Declare that actions may not be done on subjects."""
        return self.store.declare_deny(actions, subjects, conditions, predicate)

    # Queries

    def rules_for(self, action: Any, subject: Any) -> list[Rule]:
        return self.matcher.rules_for(action, subject)

    def conditions_for(self, action: Any, subject: Any, allow: bool = True) -> dict[str, Any]:
        return self.matcher.conditions_for(action, subject, allow=allow)

    def decide(self, action: Any, subject: Any, *args: Any) -> PolicyResult:
        """
        Decide an action on a subject.

        The first applicable rule that matches decides, latest declared
        first. With no match the action is denied.
        """
        for rule in self.rules_for(action, subject):
            try:
                matched = self._rule_matches(rule, subject, args)
            except Exception:
                logger.error(
                    "Rule predicate failed, denying",
                    extra={"action": action_tag(action), "rule": repr(rule)},
                    exc_info=True,
                )
                return PolicyResult.deny("Rule predicate failed", rule=rule)

            if not matched:
                continue

            if rule.allow:
                result = PolicyResult.allow(rule, reason="Allowed by rule")
            else:
                result = PolicyResult.deny("Denied by rule", rule=rule)
            self._log_decision(action, subject, result)
            return result

        result = PolicyResult.deny("No rule allows this action")
        self._log_decision(action, subject, result)
        return result

    def can(self, action: Any, subject: Any, *args: Any) -> bool:
        """Check if an action is allowed on a subject (instance or type)."""
        return self.decide(action, subject, *args).allowed

    def cannot(self, action: Any, subject: Any, *args: Any) -> bool:
        """Check if an action is not allowed on a subject."""
        return not self.can(action, subject, *args)

    def authorize(self, action: Any, subject: Any, *args: Any, not_auth: Optional[str] = None) -> None:
        """
        Require that an action is allowed on a subject.

        Raises AuthorizationError when it is not. The error carries the
        redirect target given here, else the context-wide ``not_auth``, else
        none (a plain forbidden).
        """
        result = self.decide(action, subject, *args)
        if result.allowed:
            return

        redirect_to = not_auth or self.not_auth
        logger.info(
            "Authorization denied",
            extra={
                "action": action_tag(action),
                "subject": _describe(subject),
                "reason": result.reason,
                "redirect_to": redirect_to,
            },
        )
        raise AuthorizationError(
            redirect_to=redirect_to,
            details={"action": str(action_tag(action)), "subject": _describe(subject)},
        )

    def _rule_matches(self, rule: Rule, subject: Any, args: tuple) -> bool:
        if is_type_subject(subject):
            # Deny rules narrowed by conditions never match a bare type
            return rule.allow or not rule.conditions

        if rule.predicate is not None:
            return bool(rule.predicate(subject, *args))

        if rule.conditions:
            return self.evaluator.matches(subject, rule.conditions)

        return True

    def _log_decision(self, action: Any, subject: Any, result: PolicyResult) -> None:
        logger.debug(
            "Authorization decision",
            extra={
                "action": action_tag(action),
                "subject": _describe(subject),
                "allowed": result.allowed,
                "rule": repr(result.rule) if result.rule else None,
            },
        )


def _describe(subject: Any) -> str:
    if is_type_subject(subject):
        return subject.__qualname__
    return type(subject).__qualname__
