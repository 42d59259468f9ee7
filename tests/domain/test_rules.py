"""Tests for the dependency rule model and field-path parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from depcontainer.domain.rules import (
    DependencyKind,
    DependencyRule,
    RuleEvaluation,
    parse_field_path,
)


class TestParseFieldPath:
    def test_plain_identifier(self) -> None:
        assert parse_field_path("a") == ("a", "a")

    def test_dotted_identifier(self) -> None:
        assert parse_field_path("a.b") == ("a", "b")

    def test_extra_segments_ignored(self) -> None:
        assert parse_field_path("author.profile.id") == ("author", "profile")

    def test_trailing_dot(self) -> None:
        """Edge case: empty property segment."""
        assert parse_field_path("author.") == ("author", "")


class TestDependencyRule:
    def test_build_plain(self) -> None:
        rule = DependencyRule.build("status", DependencyKind.EQUALS, "active")
        assert rule.field == "status"
        assert rule.property == "status"
        assert rule.kind is DependencyKind.EQUALS
        assert rule.operand == "active"

    def test_build_dotted(self) -> None:
        rule = DependencyRule.build("author.id", DependencyKind.NOT_EQUALS, 3)
        assert rule.field == "author"
        assert rule.property == "id"

    def test_membership_operand_becomes_tuple(self) -> None:
        rule = DependencyRule.build("category", DependencyKind.IN, ["x", "y"])
        assert rule.operand == ("x", "y")

    def test_membership_scalar_operand_wrapped(self) -> None:
        rule = DependencyRule.build("category", DependencyKind.NOT_IN, "x")
        assert rule.operand == ("x",)

    def test_membership_none_operand_is_empty(self) -> None:
        rule = DependencyRule.build("category", DependencyKind.IN, None)
        assert rule.operand == ()

    def test_flag_kinds_drop_operand(self) -> None:
        rule = DependencyRule(field="f", property="f", kind=DependencyKind.EMPTY, operand="ignored")
        assert rule.operand is None

    def test_kind_from_string(self) -> None:
        rule = DependencyRule(field="f", property="f", kind="nullOrZero")
        assert rule.kind is DependencyKind.NULL_OR_ZERO

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DependencyRule(field="f", property="f", kind="greaterThan")

    def test_frozen(self) -> None:
        rule = DependencyRule.build("f", DependencyKind.EMPTY)
        with pytest.raises(ValidationError):
            rule.field = "other"  # type: ignore[misc]


class TestToMeta:
    @pytest.mark.parametrize(
        ("kind", "operand", "key", "expected"),
        [
            (DependencyKind.EQUALS, "a", "value", "a"),
            (DependencyKind.NOT_EQUALS, "a", "not", "a"),
            (DependencyKind.EMPTY, None, "empty", True),
            (DependencyKind.NOT_EMPTY, None, "notEmpty", True),
            (DependencyKind.NULL_OR_ZERO, None, "nullOrZero", True),
            (DependencyKind.IN, ["a", "b"], "in", ["a", "b"]),
            (DependencyKind.NOT_IN, ["a"], "notin", ["a"]),
        ],
    )
    def test_one_key_per_kind(
        self,
        kind: DependencyKind,
        operand: object,
        key: str,
        expected: object,
    ) -> None:
        meta = DependencyRule.build("type.name", kind, operand).to_meta()
        assert meta == {"field": "type", "property": "name", key: expected}


class TestFromMeta:
    def test_equals_entry(self) -> None:
        rule = DependencyRule.from_meta({"field": "status", "property": "status", "value": "on"})
        assert rule.kind is DependencyKind.EQUALS
        assert rule.operand == "on"

    def test_property_defaults_from_dotted_field(self) -> None:
        rule = DependencyRule.from_meta({"field": "author.id", "value": 1})
        assert (rule.field, rule.property) == ("author", "id")

    def test_kind_key_wins_over_null_value(self) -> None:
        """Entries that carry ``value: null`` next to the real kind key."""
        rule = DependencyRule.from_meta(
            {"field": "type", "property": "type", "value": None, "notEmpty": True}
        )
        assert rule.kind is DependencyKind.NOT_EMPTY

    def test_false_flag_is_not_a_kind(self) -> None:
        rule = DependencyRule.from_meta({"field": "t", "empty": False, "value": "x"})
        assert rule.kind is DependencyKind.EQUALS

    def test_notin_entry(self) -> None:
        rule = DependencyRule.from_meta({"field": "c", "notin": ["x", "y"]})
        assert rule.kind is DependencyKind.NOT_IN
        assert rule.operand == ("x", "y")

    def test_satisfied_flag_ignored(self) -> None:
        rule = DependencyRule.from_meta({"field": "c", "in": [1], "satisfied": True})
        assert rule.kind is DependencyKind.IN

    def test_missing_field_rejected(self) -> None:
        with pytest.raises(ValueError, match="field"):
            DependencyRule.from_meta({"value": "x"})

    def test_missing_kind_rejected(self) -> None:
        with pytest.raises(ValueError, match="no condition key"):
            DependencyRule.from_meta({"field": "status"})

    def test_meta_survives_reparse(self) -> None:
        original = DependencyRule.build("a.b", DependencyKind.IN, [1, 2])
        assert DependencyRule.from_meta(original.to_meta()) == original


class TestRuleEvaluation:
    def test_defaults_unsatisfied(self) -> None:
        evaluation = RuleEvaluation(rule=DependencyRule.build("f", DependencyKind.EMPTY))
        assert evaluation.satisfied is False

    def test_to_meta_includes_satisfied(self) -> None:
        rule = DependencyRule.build("f", DependencyKind.EQUALS, 1)
        meta = RuleEvaluation(rule=rule, satisfied=True).to_meta()
        assert meta == {"field": "f", "property": "f", "value": 1, "satisfied": True}
