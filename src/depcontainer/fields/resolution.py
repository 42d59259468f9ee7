"""Flatten field lists around dependency containers.

Hosts keep containers in their field definitions but usually want the
concrete fields: every field for display, and for a fill pass only the
fields whose containers are open for the submitted request.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from depcontainer.fields.container import DependencyContainer


def displayable_fields(fields: Iterable[Any]) -> list[Any]:
    """Replace each container (recursively) with its children."""
    flat: list[Any] = []
    for field in fields:
        if isinstance(field, DependencyContainer):
            flat.extend(displayable_fields(field.fields))
        else:
            flat.append(field)
    return flat


def fillable_fields(fields: Iterable[Any], request: Any) -> list[Any]:
    """Fields to fill from *request*.

    Containers whose dependencies are not satisfied contribute nothing;
    satisfied ones are replaced by their (recursively filtered) children.
    """
    flat: list[Any] = []
    for field in fields:
        if isinstance(field, DependencyContainer):
            if field.are_dependencies_satisfied(request):
                flat.extend(fillable_fields(field.fields, request))
        else:
            flat.append(field)
    return flat
