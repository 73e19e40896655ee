"""Tests for allow/deny decisions."""

import numbers
from abc import ABC
from collections.abc import Mapping
from types import SimpleNamespace

import pytest

from fastcan.constants import ALL, Action
from fastcan.policies.ability import Ability
from fastcan.utils.exceptions import AuthorizationError


class Record(SimpleNamespace):
    """Plain entity with attribute access."""


class TestCan:
    """Test can/cannot queries."""

    def test_forbids_undeclared_actions(self, ability: Ability):
        """Test actions without a rule are denied."""
        assert ability.can("delete", "something") is False

    def test_cannot_is_negation(self, ability: Ability):
        """Test cannot is the negation of can."""
        assert ability.cannot("delete", "everything") is True

        ability.allow("delete", "everything")
        assert ability.cannot("delete", "everything") is False

    def test_all_subject_matches_everything(self, ability: Ability):
        """Test the all subject covers every subject."""
        ability.allow("edit", ALL)

        assert ability.can("edit", "user") is True
        assert ability.can("edit", Record(id=1)) is True
        assert ability.can("edit", int) is True
        assert ability.can("delete", "user") is False

    def test_allows_only_declared_action(self, ability: Ability):
        """Test a rule covers only its own actions."""
        ability.allow("create", "article")

        assert ability.can("create", "article") is True
        assert ability.can("delete", "article") is False

    def test_manage_allows_every_action(self, ability: Ability):
        """Test manage covers every action."""
        ability.allow("manage", "user")

        assert ability.can("delete", "user") is True
        assert ability.can("anything", "user") is True

    def test_deny_carves_exception_out_of_manage(self, ability: Ability):
        """Test a later deny overrides an earlier manage."""
        ability.allow("manage", Record)
        ability.deny("kick", Record)

        user = Record(id=1)
        assert ability.can("kick", user) is False
        assert ability.can("kick", Record) is False
        assert ability.can("read", user) is True
        assert ability.can("anything_else", user) is True

    def test_multiple_actions_in_one_declaration(self, ability: Ability):
        """Test declaring several actions at once."""
        ability.allow(["read", "write"], "file")

        assert ability.can("read", "file") is True
        assert ability.can("write", "file") is True
        assert ability.can("delete", "file") is False

    def test_multiple_subjects_in_one_declaration(self, ability: Ability):
        """Test declaring several subjects at once."""
        ability.allow("view", [str, float])

        assert ability.can("view", "hi") is True
        assert ability.can("view", 1.5) is True
        assert ability.can("view", 10) is False

    def test_action_enum_and_string_are_interchangeable(self, ability: Ability):
        """Test Action members and their string values match each other."""
        ability.allow(Action.READ, Record)
        ability.allow("update", Record)

        assert ability.can("read", Record(id=1)) is True
        assert ability.can(Action.UPDATE, Record(id=1)) is True

    def test_unhashable_action_is_denied(self, ability: Ability):
        """Test an unhashable action is denied instead of raising."""
        ability.allow("read", Record)

        assert ability.can(["read"], Record(id=1)) is False
        assert ability.cannot({"action": "read"}, Record) is True

    def test_unhashable_action_is_covered_by_manage(self, ability: Ability):
        """Test manage rules cover unhashable actions too."""
        ability.allow("manage", Record)

        assert ability.can(["read"], Record(id=1)) is True


class TestTypeHierarchy:
    """Test subject matching through the type hierarchy."""

    def test_allows_subclasses_and_instances(self, ability: Ability):
        """Test a class rule covers subclasses and instances."""
        ability.allow("list", numbers.Number)

        assert ability.can("list", int) is True
        assert ability.can("list", 1.2) is True
        assert ability.can("list", "this") is False

    def test_registered_virtual_subclasses_count_as_subtypes(self, ability: Ability):
        """Test classes registered on an ABC are covered."""
        class Readable(ABC):
            pass

        class Document:
            pass

        class Image:
            pass

        Readable.register(Document)
        ability.allow("read", Readable)

        assert ability.can("read", Document) is True
        assert ability.can("read", Document()) is True
        assert ability.can("read", Image) is False

    def test_multiple_classes_and_inheritance(self, ability: Ability):
        """Test several class subjects with inheritance."""
        ability.allow("read", [numbers.Number, Mapping])

        assert ability.can("read", 1) is True
        assert ability.can("read", {}) is True
        assert ability.can("read", "hi") is False


class TestPredicates:
    """Test rules carrying a dynamic predicate."""

    def test_predicate_decides_for_instances(self, ability: Ability):
        """Test the predicate decides for instances."""
        ability.allow("read", str, predicate=lambda value: value == "yes")

        assert ability.can("read", "yes") is True
        assert ability.can("read", "no") is False

    def test_truthy_predicate_results_allow(self, ability: Ability):
        """Test truthy predicate results allow."""
        ability.allow("read", str, predicate=lambda value: "sure")

        assert ability.can("read", "test") is True

    def test_every_predicate_is_tried(self, ability: Ability):
        """Test each matching rule's predicate is tried."""
        ability.allow("read", int, predicate=lambda i: i == 1)
        ability.allow("read", int, predicate=lambda i: i == 2)

        assert ability.can("read", 1) is True
        assert ability.can("read", 2) is True
        assert ability.can("read", 3) is False

    def test_extra_arguments_reach_the_predicate(self, ability: Ability):
        """Test extra arguments are passed to the predicate."""
        calls = []

        def predicate(subject, first, second):
            calls.append((subject, first, second))
            return True

        ability.allow("read", int, predicate=predicate)

        assert ability.can("read", 10, 20, 30) is True
        assert calls == [(10, 20, 30)]

    def test_predicate_replaces_conditions(self, ability: Ability):
        """Test a predicate takes precedence over conditions."""
        ability.allow("read", Record, {"owner_id": 1}, predicate=lambda record: True)

        assert ability.can("read", Record(owner_id=2)) is True

    def test_predicate_is_skipped_for_bare_types(self, ability: Ability):
        """Test predicates are not called for bare types."""
        calls = []
        ability.allow("read", Record, predicate=lambda record: calls.append(record))

        assert ability.can("read", Record) is True
        assert calls == []

    def test_failing_predicate_denies(self, ability: Ability):
        """Test a raising predicate denies."""
        ability.allow("read", Record)
        ability.deny("read", Record, predicate=lambda record: record.missing_attribute)

        result = ability.decide("read", Record(id=1))

        assert result.allowed is False
        assert result.reason == "Rule predicate failed"
        assert ability.can("read", Record(id=1)) is False


class TestConditions:
    """Test rules carrying static conditions."""

    def test_equality_condition(self, ability: Ability):
        """Test equality conditions."""
        ability.allow("number", int, {"real": 1})

        assert ability.can("number", 1) is True
        assert ability.can("number", 2) is False

    def test_list_condition(self, ability: Ability):
        """Test list membership conditions."""
        ability.allow("read", int, {"real": [1, 2, 3]})

        assert ability.can("read", 2) is True
        assert ability.can("read", 10) is False

    def test_range_condition(self, ability: Ability):
        """Test range membership conditions."""
        ability.allow("read", int, {"real": range(1, 6)})

        assert ability.can("read", 2) is True
        assert ability.can("read", 10) is False

    def test_nested_condition(self, ability: Ability):
        """Test nested mapping conditions."""
        ability.allow("read", Record, {"owner": {"id": 2}})

        assert ability.can("read", Record(owner=Record(id=2))) is True
        assert ability.can("read", Record(owner=Record(id=3))) is False
        assert ability.can("read", Record(owner=None)) is False

    def test_nested_condition_matches_any_element(self, ability: Ability):
        """Test nested conditions match any element of a sequence."""
        ability.allow("read", Record, {"tags": {"name": "urgent"}})

        tagged = Record(tags=[Record(name="low"), Record(name="urgent")])
        untagged = Record(tags=[Record(name="low")])

        assert ability.can("read", tagged) is True
        assert ability.can("read", untagged) is False

    def test_mapping_subjects_are_read_by_key(self, ability: Ability):
        """Test mapping subjects are read by key."""
        ability.allow("read", dict, {"owner_id": 1})

        assert ability.can("read", {"owner_id": 1}) is True
        assert ability.can("read", {"owner_id": 2}) is False

    def test_conditional_deny_does_not_stop_earlier_allow(self, ability: Ability):
        """Test a conditional deny only denies matching instances."""
        ability.allow("read", int)
        ability.deny("read", int, {"real": 2})

        assert ability.can("read", 1) is True
        assert ability.can("read", 2) is False
        assert ability.can("read", 3) is True

    def test_conditions_are_ignored_for_bare_types(self, ability: Ability):
        """Test conditions do not restrict bare type checks."""
        ability.allow("list", Record, {"owner_id": 1})
        ability.deny("list", Record, {"archived": True})

        assert ability.can("list", Record) is True

    def test_unconditional_deny_applies_to_bare_types(self, ability: Ability):
        """Test an unconditional deny denies bare types."""
        ability.allow("list", Record, {"owner_id": 1})
        ability.deny("list", Record)

        assert ability.can("list", Record) is False


class TestDecide:
    """Test the decision record."""

    def test_records_the_deciding_rule(self, ability: Ability):
        """Test the decision records the deciding rule."""
        ability.allow("read", Record)
        deny_rule = ability.deny("read", Record, {"id": 2})

        result = ability.decide("read", Record(id=2))

        assert result.allowed is False
        assert result.rule is deny_rule

    def test_default_deny_has_no_rule(self, ability: Ability):
        """Test the default denial carries no rule."""
        result = ability.decide("read", Record(id=1))

        assert result.allowed is False
        assert result.rule is None
        assert result.reason == "No rule allows this action"


class TestAuthorize:
    """Test enforcing decisions."""

    def test_returns_none_when_allowed(self, ability: Ability):
        """Test authorize returns quietly when allowed."""
        ability.allow("read", "data")

        assert ability.authorize("read", "data", not_auth="/hi") is None

    def test_raises_forbidden_without_redirect(self, ability: Ability):
        """Test a denial without redirect target."""
        with pytest.raises(AuthorizationError) as exc_info:
            ability.authorize("read", "data")

        assert exc_info.value.redirect_to is None
        assert exc_info.value.error_code == "ACCESS_DENIED"
        assert exc_info.value.details == {"action": "read", "subject": "str"}

    def test_redirect_override_wins(self):
        """Test the call's redirect target beats the context's."""
        ability = Ability(not_auth="/login")

        with pytest.raises(AuthorizationError) as exc_info:
            ability.authorize("read", "data", not_auth="/hi")

        assert exc_info.value.redirect_to == "/hi"

    def test_context_default_redirect(self):
        """Test the context's redirect target is the default."""
        ability = Ability(not_auth="/login")

        with pytest.raises(AuthorizationError) as exc_info:
            ability.authorize("read", "data")

        assert exc_info.value.redirect_to == "/login"

    def test_extra_arguments_reach_the_predicate(self, ability: Ability):
        """Test extra arguments are passed to the predicate."""
        ability.allow("read", Record, predicate=lambda record, user_id: record.owner_id == user_id)

        ability.authorize("read", Record(owner_id=5), 5)
        with pytest.raises(AuthorizationError):
            ability.authorize("read", Record(owner_id=5), 6)
