"""Tests for loose comparison and emptiness helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from depcontainer.domain.coercion import (
    is_empty,
    is_null_or_zero,
    is_numeric_string,
    loose_contains,
    loose_equals,
)


class TestLooseEquals:
    @pytest.mark.parametrize(
        ("left", "right"),
        [
            (0, "0"),
            ("1", 1),
            (1, "1.0"),
            ("10", "1e1"),
            (" 5", 5),
            (1.0, 1),
            (Decimal("2.5"), "2.5"),
            ("active", "active"),
            (None, None),
            (True, "yes"),
            (False, ""),
            (False, "0"),
            ([1, "2"], ["1", 2]),
            ({"a": "1"}, {"a": 1}),
            (9007199254740993, "9007199254740993"),
            ("9007199254740993", "9007199254740993.0"),
            (10**400, "1e400"),
            ("1e400", "10e399"),
            (0.1, "0.1"),
        ],
    )
    def test_equal_pairs(self, left: object, right: object) -> None:
        assert loose_equals(left, right) is True
        assert loose_equals(right, left) is True

    @pytest.mark.parametrize(
        ("left", "right"),
        [
            (None, ""),
            (None, 0),
            (None, "0"),
            (None, False),
            (0, "a"),
            ("abc", "ABC"),
            ("1", "01x"),
            (True, ""),
            ([1, 2], [1]),
            ({"a": 1}, {"b": 1}),
            ("active", "inactive"),
            (9007199254740993, "9007199254740992"),
            ("9007199254740993", "9007199254740992"),
            (10**400, "5"),
            (10**400, 10**400 + 1),
            ("1e400", "1e401"),
            (10**400, "many"),
        ],
    )
    def test_unequal_pairs(self, left: object, right: object) -> None:
        assert loose_equals(left, right) is False
        assert loose_equals(right, left) is False

    def test_float_number_against_text(self) -> None:
        """Integral floats compare against non-numeric text as integers."""
        assert loose_equals(2.0, "2") is True
        assert loose_equals(2.0, "2 apples") is False

    def test_float_against_overflowing_text(self) -> None:
        assert loose_equals(1.5, "1e400") is False

    def test_huge_int_members(self) -> None:
        assert loose_contains(10**400, ["1", "2"]) is False
        assert loose_contains("9007199254740993", [9007199254740992, 9007199254740993]) is True


class TestIsEmpty:
    @pytest.mark.parametrize("value", [None, False, 0, 0.0, "", "0", [], {}, (), set()])
    def test_empty_values(self, value: object) -> None:
        assert is_empty(value) is True

    @pytest.mark.parametrize("value", [True, 1, -1, 0.1, "a", "00", " ", [0], {"k": None}, object()])
    def test_non_empty_values(self, value: object) -> None:
        assert is_empty(value) is False


class TestIsNullOrZero:
    @pytest.mark.parametrize("value", [None, 0, "0"])
    def test_display_matches(self, value: object) -> None:
        assert is_null_or_zero(value) is True

    @pytest.mark.parametrize("value", ["", False, 0.0, "00", " 0", [], 1])
    def test_display_rejects(self, value: object) -> None:
        assert is_null_or_zero(value) is False

    def test_blank_only_with_allow_blank(self) -> None:
        assert is_null_or_zero("") is False
        assert is_null_or_zero("", allow_blank=True) is True

    def test_allow_blank_stays_strict(self) -> None:
        assert is_null_or_zero(False, allow_blank=True) is False
        assert is_null_or_zero(" ", allow_blank=True) is False


class TestNumericString:
    @pytest.mark.parametrize("value", ["0", "-1", "+2.5", ".5", "1e3", " 7 ", "3."])
    def test_numeric(self, value: str) -> None:
        assert is_numeric_string(value) is True

    @pytest.mark.parametrize("value", ["", "abc", "0x1A", "1,000", "e5", 5])
    def test_not_numeric(self, value: object) -> None:
        assert is_numeric_string(value) is False


class TestLooseContains:
    def test_member_found_loosely(self) -> None:
        assert loose_contains("1", [1, 2, 3]) is True

    def test_member_missing(self) -> None:
        assert loose_contains("x", ("a", "b")) is False

    def test_none_not_in_blank_members(self) -> None:
        assert loose_contains(None, ["", 0]) is False

    def test_mapping_searched_by_value(self) -> None:
        assert loose_contains("b", {"first": "a", "second": "b"}) is True
        assert loose_contains("first", {"first": "a"}) is False
