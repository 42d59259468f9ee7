"""Field: minimal host-style form field with resolve/fill/serialize.

A field reads its value from a resource (``resolve`` for edit forms,
``resolve_for_display`` for detail views), writes submitted request data
onto a model (``fill``), and serializes itself for the presentation layer
(``json_serialize``).

``fill`` may return a deferred callback: work that has to run after the
model has been saved (attaching relations, moving uploads). Callers collect
these and invoke them once the primary write pass completes.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, MutableMapping
from typing import Any, Protocol, runtime_checkable

from depcontainer.domain.sources import MappingSource, request_source, resource_source

DeferredCallback = Callable[[], Any]
ResolveCallback = Callable[[Any, Any, str], Any]
FillCallback = Callable[[Any, Any, str], "DeferredCallback | None"]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_WORD = re.compile(r"[^0-9a-zA-Z]+")


@runtime_checkable
class ChildField(Protocol):
    """What a dependency container requires of the fields it wraps."""

    def resolve_for_display(self, resource: Any, attribute: str | None = None) -> None: ...

    def resolve(self, resource: Any, attribute: str | None = None) -> None: ...

    def fill(self, request: Any, model: Any) -> DeferredCallback | None: ...


def snake_attribute(name: str) -> str:
    """Derive a default attribute name from a field label.

    Examples:
        >>> snake_attribute("First Name")
        'first_name'
        >>> snake_attribute("postStatus")
        'post_status'
    """
    text = _CAMEL_BOUNDARY.sub("_", name)
    text = _NON_WORD.sub("_", text)
    return text.strip("_").lower()


class Field:
    """Base form field.

    Attributes:
        name: Human-readable label.
        attribute: Key read from resources and requests.
        value: Value from the latest resolve pass.
        meta: Extra data merged into the serialized form.
    """

    component: str = "text-field"
    show_on_index: bool = True

    def __init__(
        self,
        name: str,
        attribute: str | None = None,
        resolve_callback: ResolveCallback | None = None,
    ) -> None:
        self.name = name
        self.attribute = attribute if attribute is not None else snake_attribute(name)
        self.resolve_callback = resolve_callback
        self.display_callback: ResolveCallback | None = None
        self.fill_callback: FillCallback | None = None
        self.value: Any = None
        self.meta: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, attribute={self.attribute!r})"

    # --- Builders ---

    def with_meta(self, meta: Mapping[str, Any]) -> Field:
        """Merge *meta* into the field's metadata."""
        self.meta = {**self.meta, **meta}
        return self

    def display_using(self, callback: ResolveCallback) -> Field:
        """Transform the value shown on detail views."""
        self.display_callback = callback
        return self

    def fill_using(self, callback: FillCallback) -> Field:
        """Replace the default fill with ``callback(request, model, attribute)``."""
        self.fill_callback = callback
        return self

    # --- Resolution ---

    def resolve(self, resource: Any, attribute: str | None = None) -> None:
        """Read the field's value from *resource*."""
        attribute = attribute or self.attribute
        value = resource_source(resource).get(attribute)
        if self.resolve_callback is not None:
            value = self.resolve_callback(value, resource, attribute)
        self.value = value

    def resolve_for_display(self, resource: Any, attribute: str | None = None) -> None:
        """Resolve, then apply the display callback if one is set."""
        attribute = attribute or self.attribute
        self.resolve(resource, attribute)
        if self.display_callback is not None:
            self.value = self.display_callback(self.value, resource, attribute)

    # --- Filling ---

    def fill(self, request: Any, model: Any) -> DeferredCallback | None:
        """Write this field's request value onto *model*."""
        return self.fill_into(request, model, self.attribute)

    def fill_into(self, request: Any, model: Any, attribute: str) -> DeferredCallback | None:
        """Write ``request[attribute]`` onto ``model.<attribute>``.

        Keys absent from the request leave the model untouched.
        """
        if self.fill_callback is not None:
            return self.fill_callback(request, model, attribute)

        if not _request_has(request, attribute):
            return None

        value = request_source(request).get(attribute)
        if isinstance(model, MutableMapping):
            model[attribute] = value
        else:
            setattr(model, attribute, value)
        return None

    # --- Serialization ---

    def json_serialize(self) -> dict[str, Any]:
        """Serialize for the presentation layer."""
        return {
            "component": self.component,
            "attribute": self.attribute,
            "name": self.name,
            "value": self.value,
            "showOnIndex": self.show_on_index,
            **self.meta,
        }


def _request_has(request: Any, key: str) -> bool:
    if isinstance(request, Mapping):
        return key in request
    if isinstance(request, MappingSource):
        return key in request.data
    has = getattr(request, "has", None)
    if callable(has):
        return bool(has(key))
    contains = getattr(request, "__contains__", None)
    if callable(contains):
        return bool(contains(key))
    return hasattr(request, key)
