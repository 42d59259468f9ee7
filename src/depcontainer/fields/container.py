"""DependencyContainer: a field that wraps child fields behind dependency rules.

The container renders its children only when the configured conditions on
other fields hold. Rules are declared once, at field-definition time::

    DependencyContainer([Field("Admin Notes")]).depends_on("role", "admin")

and evaluated per request twice over:

- ``resolve_for_display(resource)`` resolves every child and records which
  rules hold for the stored resource; the ``satisfied`` flags travel to the
  presentation layer in ``json_serialize()``.
- ``are_dependencies_satisfied(request)`` gates the fill pass: children are
  only written when every rule holds for the submitted data.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from depcontainer.config.models import ContainerConfig
from depcontainer.domain.rules import DependencyKind, DependencyRule, RuleEvaluation
from depcontainer.fields.base import ChildField, DeferredCallback, Field, ResolveCallback
from depcontainer.services.evaluator import DependencyEvaluator

logger = logging.getLogger(__name__)


class DependencyContainer(Field):
    """Field wrapper revealing its children when dependency rules hold.

    Attributes:
        fields: The wrapped child fields, in declaration order.
        rules: Declared dependency rules, in declaration order.
        evaluations: Results of the latest display pass, or None.
    """

    component = "dependency-container"
    show_on_index = False

    def __init__(
        self,
        fields: Iterable[ChildField],
        attribute: str | None = None,
        resolve_callback: ResolveCallback | None = None,
        *,
        evaluator: DependencyEvaluator | None = None,
        config: ContainerConfig | None = None,
    ) -> None:
        super().__init__("", attribute, resolve_callback)
        self.fields: list[ChildField] = list(fields)
        self.rules: list[DependencyRule] = []
        self.evaluations: list[RuleEvaluation] | None = None
        self.evaluator = evaluator or DependencyEvaluator()
        if config is not None:
            self.component = config.component
            self.show_on_index = config.show_on_index

    @classmethod
    def from_meta(
        cls,
        meta: Mapping[str, Any],
        fields: Iterable[ChildField] = (),
        **kwargs: Any,
    ) -> DependencyContainer:
        """Rebuild a container from serialized metadata.

        Reads ``attribute`` and the ``dependencies`` list; ``satisfied``
        flags in the input are ignored.

        Raises:
            ValueError: If a dependency entry cannot be parsed.
        """
        container = cls(fields, meta.get("attribute"), **kwargs)
        for entry in meta.get("dependencies") or []:
            container._add_dependency(DependencyRule.from_meta(entry))
        return container

    # ------------------------------------------------------------------
    # Rule builders
    # ------------------------------------------------------------------

    def depends_on(self, field: str, value: Any) -> DependencyContainer:
        """Require *field* to loosely equal *value*."""
        return self._add_dependency(DependencyRule.build(field, DependencyKind.EQUALS, value))

    def depends_on_not(self, field: str, value: Any) -> DependencyContainer:
        """Require *field* to differ from *value*."""
        return self._add_dependency(DependencyRule.build(field, DependencyKind.NOT_EQUALS, value))

    def depends_on_empty(self, field: str) -> DependencyContainer:
        """Require *field* to be empty."""
        return self._add_dependency(DependencyRule.build(field, DependencyKind.EMPTY))

    def depends_on_not_empty(self, field: str) -> DependencyContainer:
        """Require *field* to be non-empty."""
        return self._add_dependency(DependencyRule.build(field, DependencyKind.NOT_EMPTY))

    def depends_on_null_or_zero(self, field: str) -> DependencyContainer:
        """Require *field* to be null or zero."""
        return self._add_dependency(DependencyRule.build(field, DependencyKind.NULL_OR_ZERO))

    def depends_on_in(self, field: str, values: Iterable[Any]) -> DependencyContainer:
        """Require *field* to be one of *values*."""
        return self._add_dependency(DependencyRule.build(field, DependencyKind.IN, values))

    def depends_on_not_in(self, field: str, values: Iterable[Any]) -> DependencyContainer:
        """Require *field* to be none of *values*."""
        return self._add_dependency(DependencyRule.build(field, DependencyKind.NOT_IN, values))

    def _add_dependency(self, rule: DependencyRule) -> DependencyContainer:
        self.rules.append(rule)
        self.evaluations = None
        logger.debug("Added dependency on %s.%s (%s)", rule.field, rule.property, rule.kind)
        return self

    # ------------------------------------------------------------------
    # Evaluation and delegation
    # ------------------------------------------------------------------

    def resolve_for_display(self, resource: Any, attribute: str | None = None) -> None:
        """Resolve every child for display and evaluate the rules against *resource*.

        Children always resolve; visibility is decided by the consumer from
        the ``satisfied`` flags.
        """
        for field in self.fields:
            field.resolve_for_display(resource)

        self.evaluations = self.evaluator.evaluate_for_display(self.rules, resource)

    def resolve(self, resource: Any, attribute: str | None = None) -> None:
        """Forward resolution to every child field."""
        for field in self.fields:
            field.resolve(resource, attribute)

    def fill_into(
        self,
        request: Any,
        model: Any,
        attribute: str,
        request_attribute: str | None = None,
    ) -> DeferredCallback:
        """Fill every child and return one callback running their deferred work.

        Deferred callbacks run in child order; children returning nothing
        are skipped.
        """
        callbacks = [field.fill(request, model) for field in self.fields]

        def run_deferred() -> None:
            for callback in callbacks:
                if callable(callback):
                    callback()

        return run_deferred

    def are_dependencies_satisfied(self, request: Any) -> bool:
        """Whether the children may be filled from *request*.

        False when no rules are declared; otherwise every rule must hold.
        """
        return self.evaluator.are_satisfied(self.rules, request)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @property
    def dependencies(self) -> list[dict[str, Any]]:
        """Serialized rules with ``satisfied`` from the latest display pass."""
        if self.evaluations is None:
            return [RuleEvaluation(rule=rule).to_meta() for rule in self.rules]
        return [evaluation.to_meta() for evaluation in self.evaluations]

    def json_serialize(self) -> dict[str, Any]:
        payload = super().json_serialize()
        payload["fields"] = [_serialize_child(field) for field in self.fields]
        payload["dependencies"] = self.dependencies
        return payload


def _serialize_child(field: Any) -> Any:
    serialize = getattr(field, "json_serialize", None)
    if callable(serialize):
        return serialize()
    return field
