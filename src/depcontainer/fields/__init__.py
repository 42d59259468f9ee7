"""Field layer: the field base class, dependency containers, and flattening helpers."""

from depcontainer.fields.base import ChildField, Field
from depcontainer.fields.container import DependencyContainer
from depcontainer.fields.resolution import displayable_fields, fillable_fields

__all__ = [
    "ChildField",
    "DependencyContainer",
    "Field",
    "displayable_fields",
    "fillable_fields",
]
