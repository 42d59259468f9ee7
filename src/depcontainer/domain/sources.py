"""Value sources: uniform ``get(key)`` access over resources and requests.

Hosts hand the container whatever they have: ORM models, plain dicts,
request objects with a ``get`` method. The evaluator only ever sees a
:class:`ValueSource`; the adapters below wrap the concrete object.

INVARIANT: Missing keys and attributes read as ``None``, never raise.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ValueSource(Protocol):
    """Read-only keyed access to a resource or request."""

    def get(self, key: str) -> Any:
        """Return the value stored under *key*, or None."""
        ...


class MappingSource:
    """Adapter over a plain mapping (decoded JSON, form dicts)."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        self.data = data

    def get(self, key: str) -> Any:
        return self.data.get(key)

    def has(self, key: str) -> bool:
        """Whether *key* is present with a non-None value."""
        return self.data.get(key) is not None


class AttributeSource:
    """Adapter over an object exposing its values as attributes."""

    def __init__(self, obj: Any) -> None:
        self.obj = obj

    def get(self, key: str) -> Any:
        return getattr(self.obj, key, None)


class RequestSource:
    """Adapter over a request-like object with its own ``get(key)``."""

    def __init__(self, request: Any) -> None:
        self.request = request

    def get(self, key: str) -> Any:
        return self.request.get(key)


def resource_source(resource: Any) -> MappingSource | AttributeSource | ValueSource:
    """Wrap a stored resource for attribute reads."""
    if isinstance(resource, (MappingSource, AttributeSource, RequestSource)):
        return resource
    if isinstance(resource, Mapping):
        return MappingSource(resource)
    return AttributeSource(resource)


def request_source(request: Any) -> MappingSource | AttributeSource | ValueSource:
    """Wrap submitted request data for key reads."""
    if isinstance(request, (MappingSource, AttributeSource, RequestSource)):
        return request
    if isinstance(request, Mapping):
        return MappingSource(request)
    if callable(getattr(request, "get", None)):
        return RequestSource(request)
    return AttributeSource(request)
