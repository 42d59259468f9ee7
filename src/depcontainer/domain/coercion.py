"""Loose comparison and emptiness helpers.

Admin-panel request data arrives as strings while stored resources carry
typed values, so dependency rules compare values loosely: ``0`` matches
``"0"``, ``"10"`` matches ``"1e1"``, ``True`` matches any non-empty value.
Every rule kind goes through the helpers here; nothing in the evaluator
relies on Python's own ``==`` between mixed types.

INVARIANT: ``None`` is loosely equal only to ``None``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sized
from decimal import Decimal
from typing import Any

_NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

NULL_OR_ZERO_DISPLAY: tuple[Any, ...] = (None, 0, "0")
NULL_OR_ZERO_FILL: tuple[Any, ...] = (None, 0, "0", "")


def is_number(value: Any) -> bool:
    """Return True for int/float/Decimal values, excluding bools."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_numeric_string(value: Any) -> bool:
    """Check whether *value* is a string holding a decimal or exponent number.

    Examples:
        >>> is_numeric_string(" 42 ")
        True
        >>> is_numeric_string("1e3")
        True
        >>> is_numeric_string("0x1A")
        False
    """
    return isinstance(value, str) and _NUMERIC_STRING.match(value) is not None


def is_empty(value: Any) -> bool:
    """Loose emptiness test.

    Empty values are ``None``, ``False``, numeric zero, ``""``, ``"0"``
    and empty collections.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if is_number(value):
        return value == 0
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def is_null_or_zero(value: Any, *, allow_blank: bool = False) -> bool:
    """Strict membership in ``{None, 0, "0"}``, plus ``""`` when *allow_blank*.

    Strict means ``False``, ``0.0`` and ``"00"`` never match.
    """
    candidates = NULL_OR_ZERO_FILL if allow_blank else NULL_OR_ZERO_DISPLAY
    return any(value is c or (type(value) is type(c) and value == c) for c in candidates)


def _number_to_string(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return str(value)


def _parse_numeric(text: str) -> Decimal | None:
    """Exact value of a numeric string; None when it is not one.

    Decimal keeps every digit and never overflows, so ``"1e400"`` and
    ``"1e401"`` stay distinct and large IDs compare digit for digit.
    """
    if not is_numeric_string(text):
        return None
    try:
        return Decimal(text.strip())
    except ArithmeticError:
        return None


def _compare_number_string(number: Any, text: str) -> bool:
    if isinstance(number, float):
        # a float side compares as float
        if is_numeric_string(text):
            return number == float(text)
        return _number_to_string(number) == text
    parsed = _parse_numeric(text)
    if parsed is None:
        return False
    return bool(number == parsed)


def loose_equals(left: Any, right: Any) -> bool:
    """Compare two values with the numeric/string coercions form data needs.

    Examples:
        >>> loose_equals(0, "0")
        True
        >>> loose_equals(None, "")
        False
        >>> loose_equals("10", "1e1")
        True
        >>> loose_equals(1, "1.0")
        True
        >>> loose_equals(0, "a")
        False
    """
    if left is None or right is None:
        return left is None and right is None

    if isinstance(left, bool) or isinstance(right, bool):
        return is_empty(left) == is_empty(right)

    if is_number(left) and is_number(right):
        return bool(left == right)
    if is_number(left) and isinstance(right, str):
        return _compare_number_string(left, right)
    if isinstance(left, str) and is_number(right):
        return _compare_number_string(right, left)

    if isinstance(left, str) and isinstance(right, str):
        left_number, right_number = _parse_numeric(left), _parse_numeric(right)
        if left_number is not None and right_number is not None:
            return left_number == right_number
        return left == right

    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if set(left) != set(right):
            return False
        return all(loose_equals(left[key], right[key]) for key in left)

    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(loose_equals(a, b) for a, b in zip(left, right, strict=True))

    return bool(left == right)


def loose_contains(value: Any, members: Iterable[Any]) -> bool:
    """Return True when *value* loosely equals any of *members*.

    Mapping members are searched by value, not by key.
    """
    if isinstance(members, Mapping):
        members = members.values()
    return any(loose_equals(value, member) for member in members)
