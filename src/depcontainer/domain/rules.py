"""Dependency rule model and field-path parsing.

A rule names another field (``field``), the attribute to read from the
resource or request (``property``), and exactly one condition ``kind``.
Rules are immutable; the outcome of a display pass is carried by a
separate :class:`RuleEvaluation` record.

Serialized form (the ``dependencies`` entries of a container's metadata)
uses one key per kind::

    {"field": "role", "property": "role", "value": "admin"}
    {"field": "role", "property": "role", "notin": ["guest"]}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, model_validator


class DependencyKind(StrEnum):
    """The condition a dependency rule checks."""

    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    EMPTY = "empty"
    NOT_EMPTY = "notEmpty"
    NULL_OR_ZERO = "nullOrZero"
    IN = "in"
    NOT_IN = "notIn"


# Kind -> key used in serialized dependency metadata.
META_KEYS: dict[DependencyKind, str] = {
    DependencyKind.EQUALS: "value",
    DependencyKind.NOT_EQUALS: "not",
    DependencyKind.EMPTY: "empty",
    DependencyKind.NOT_EMPTY: "notEmpty",
    DependencyKind.NULL_OR_ZERO: "nullOrZero",
    DependencyKind.IN: "in",
    DependencyKind.NOT_IN: "notin",
}

FLAG_KINDS = frozenset({DependencyKind.EMPTY, DependencyKind.NOT_EMPTY, DependencyKind.NULL_OR_ZERO})
MEMBERSHIP_KINDS = frozenset({DependencyKind.IN, DependencyKind.NOT_IN})

# "value" is checked last: older metadata carries a null "value" key
# alongside the real kind key.
_META_LOOKUP_ORDER: tuple[DependencyKind, ...] = (
    DependencyKind.EMPTY,
    DependencyKind.NOT_EMPTY,
    DependencyKind.NULL_OR_ZERO,
    DependencyKind.NOT_EQUALS,
    DependencyKind.IN,
    DependencyKind.NOT_IN,
    DependencyKind.EQUALS,
)


def parse_field_path(path: str) -> tuple[str, str]:
    """Split a ``field.property`` identifier into ``(field, property)``.

    A plain identifier reads its own name. Only the first two segments
    are used.

    Examples:
        >>> parse_field_path("status")
        ('status', 'status')
        >>> parse_field_path("author.id")
        ('author', 'id')
        >>> parse_field_path("a.b.c")
        ('a', 'b')
    """
    parts = path.split(".")
    if len(parts) == 1:
        return parts[0], parts[0]
    return parts[0], parts[1]


class DependencyRule(BaseModel):
    """One condition on another field's value.

    Attributes:
        field: Identifier of the referenced field.
        property: Attribute read from the resource or request.
        kind: The single active condition.
        operand: Scalar for equals/notEquals, tuple for in/notIn,
            None for the flag kinds.
    """

    model_config = {"frozen": True}

    field: str
    property: str
    kind: DependencyKind
    operand: Any = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_operand(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        try:
            kind = DependencyKind(data.get("kind"))
        except ValueError:
            return data  # field validation reports the bad kind
        if kind in FLAG_KINDS:
            return {**data, "operand": None}
        if kind in MEMBERSHIP_KINDS:
            return {**data, "operand": _as_members(data.get("operand"))}
        return data

    @classmethod
    def build(cls, path: str, kind: DependencyKind, operand: Any = None) -> DependencyRule:
        """Create a rule from a dotted-or-plain field identifier."""
        field, prop = parse_field_path(path)
        return cls(field=field, property=prop, kind=kind, operand=operand)

    @classmethod
    def from_meta(cls, data: Mapping[str, Any]) -> DependencyRule:
        """Parse one serialized ``dependencies`` entry back into a rule.

        Raises:
            ValueError: If the entry has no ``field`` or no kind key.
        """
        raw_field = data.get("field")
        if not isinstance(raw_field, str) or not raw_field:
            msg = "Dependency entry requires a non-empty 'field'"
            raise ValueError(msg)

        field, prop = parse_field_path(raw_field)
        prop = data.get("property") or prop

        for kind in _META_LOOKUP_ORDER:
            key = META_KEYS[kind]
            if key not in data:
                continue
            if kind in FLAG_KINDS and not data[key]:
                continue
            operand = None if kind in FLAG_KINDS else data[key]
            return cls(field=field, property=prop, kind=kind, operand=operand)

        msg = f"Dependency entry for '{raw_field}' has no condition key"
        raise ValueError(msg)

    def to_meta(self) -> dict[str, Any]:
        """Serialize to a ``dependencies`` entry (without ``satisfied``)."""
        key = META_KEYS[self.kind]
        if self.kind in FLAG_KINDS:
            value: Any = True
        elif self.kind in MEMBERSHIP_KINDS:
            value = list(self.operand)
        else:
            value = self.operand
        return {"field": self.field, "property": self.property, key: value}


class RuleEvaluation(BaseModel):
    """Outcome of checking one rule during a display pass."""

    model_config = {"frozen": True}

    rule: DependencyRule
    satisfied: bool = False

    def to_meta(self) -> dict[str, Any]:
        """Serialize as a ``dependencies`` entry including ``satisfied``."""
        return {**self.rule.to_meta(), "satisfied": self.satisfied}


def _as_members(operand: Any) -> tuple[Any, ...]:
    if operand is None:
        return ()
    if isinstance(operand, (str, bytes)):
        return (operand,)
    if isinstance(operand, Mapping):
        return tuple(operand.values())
    if isinstance(operand, Iterable):
        return tuple(operand)
    return (operand,)
