"""DependencyEvaluator: display and fill-gate evaluation of dependency rules.

Two passes over the same rule kinds, against two data sources:

- Display: a stored resource. Every rule gets a :class:`RuleEvaluation`;
  ``equals`` rules fall back to the polymorphic discriminator
  (``<property>_type``) when the direct value does not match.
- Fill gate: submitted request data. True only when at least one rule
  exists and every rule holds.

INVARIANT: Evaluation never raises a domain error. Missing values read as
None and simply fail to match (``empty``/``nullOrZero`` treat None as a
match).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from depcontainer.config.models import EvaluationConfig
from depcontainer.domain.coercion import (
    is_empty,
    is_null_or_zero,
    loose_contains,
    loose_equals,
)
from depcontainer.domain.rules import DependencyKind, DependencyRule, RuleEvaluation
from depcontainer.domain.sources import MappingSource, request_source, resource_source
from depcontainer.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class DependencyEvaluator:
    """Evaluates dependency rules against resources and requests.

    Usage::

        evaluator = DependencyEvaluator()
        evaluations = evaluator.evaluate_for_display(rules, post)
        if evaluator.are_satisfied(rules, request):
            ...
    """

    def __init__(
        self,
        config: EvaluationConfig | None = None,
        plugins: PluginManager | None = None,
    ) -> None:
        self.config = config or EvaluationConfig()
        self._plugins = plugins

    @property
    def plugins(self) -> PluginManager:
        """Discriminator strategy plugins (built-ins only unless supplied)."""
        if self._plugins is None:
            self._plugins = PluginManager()
        return self._plugins

    # ------------------------------------------------------------------
    # Display evaluation
    # ------------------------------------------------------------------

    def evaluate_for_display(
        self,
        rules: Sequence[DependencyRule],
        resource: Any,
    ) -> list[RuleEvaluation]:
        """Compute one :class:`RuleEvaluation` per rule against *resource*."""
        source = resource_source(resource)
        evaluations: list[RuleEvaluation] = []
        for rule in rules:
            satisfied = self._display_satisfied(rule, source)
            logger.debug(
                "Display dependency %s.%s (%s): %s",
                rule.field,
                rule.property,
                rule.kind,
                satisfied,
            )
            evaluations.append(RuleEvaluation(rule=rule, satisfied=satisfied))
        return evaluations

    def _display_satisfied(self, rule: DependencyRule, source: Any) -> bool:
        value = source.get(rule.property)
        if rule.kind is not DependencyKind.EQUALS:
            return _check_rule(rule, value, allow_blank=False)

        if isinstance(source, MappingSource):
            return source.has(rule.property) and loose_equals(value, rule.operand)

        if loose_equals(value, rule.operand):
            return True

        return self._discriminator_matches(rule, source)

    def _discriminator_matches(self, rule: DependencyRule, source: Any) -> bool:
        if not self.config.polymorphic_fallback:
            return False
        discriminator = source.get(rule.property + self.config.discriminator_suffix)
        if is_empty(discriminator):
            return False
        return self.plugins.match_discriminator(
            str(discriminator),
            rule.operand,
            self.config.namespace_separator,
        )

    # ------------------------------------------------------------------
    # Fill-gate evaluation
    # ------------------------------------------------------------------

    def evaluate_for_fill(
        self,
        rules: Sequence[DependencyRule],
        request: Any,
    ) -> list[RuleEvaluation]:
        """Per-rule breakdown of the fill gate against *request*."""
        source = request_source(request)
        return [
            RuleEvaluation(rule=rule, satisfied=_fill_satisfied(rule, source.get(rule.property)))
            for rule in rules
        ]

    def are_satisfied(self, rules: Any, request: Any) -> bool:
        """Whether every rule holds for *request*.

        A missing, empty, or non-sequence rule list never satisfies the
        gate: a container only fills once it has at least one rule.
        """
        if not rules or not _is_rule_sequence(rules):
            logger.debug("Fill gate closed: no dependency rules")
            return False

        evaluations = self.evaluate_for_fill(rules, request)
        satisfied_count = sum(1 for evaluation in evaluations if evaluation.satisfied)
        logger.debug("Fill gate: %d/%d dependencies satisfied", satisfied_count, len(rules))
        return satisfied_count == len(rules)


def _is_rule_sequence(rules: Any) -> bool:
    return isinstance(rules, Sequence) and not isinstance(rules, (str, bytes))


def _fill_satisfied(rule: DependencyRule, value: Any) -> bool:
    # equals/notEquals with no operand never match on fill
    if rule.kind in (DependencyKind.EQUALS, DependencyKind.NOT_EQUALS) and rule.operand is None:
        return False
    return _check_rule(rule, value, allow_blank=True)


def _check_rule(rule: DependencyRule, value: Any, *, allow_blank: bool) -> bool:
    """Apply the rule's kind to *value*.

    *allow_blank* widens ``nullOrZero`` to accept ``""`` (fill pass).
    """
    kind = rule.kind

    if kind is DependencyKind.EMPTY:
        return is_empty(value)

    elif kind is DependencyKind.NOT_EMPTY:
        return not is_empty(value)

    elif kind is DependencyKind.NULL_OR_ZERO:
        return is_null_or_zero(value, allow_blank=allow_blank)

    elif kind is DependencyKind.NOT_EQUALS:
        return not loose_equals(value, rule.operand)

    elif kind is DependencyKind.IN:
        return loose_contains(value, rule.operand)

    elif kind is DependencyKind.NOT_IN:
        return not loose_contains(value, rule.operand)

    return loose_equals(value, rule.operand)
