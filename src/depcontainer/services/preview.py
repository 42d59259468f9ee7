"""PreviewService: evaluate a serialized container definition against sample data.

Used by the ``depcontainer`` CLI to check dependency rules outside a host
application. The definition is the container's serialized metadata (the
``dependencies`` list and optional ``attribute``); the data is a JSON
object standing in for the resource (display mode) or the submitted
request (fill mode).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Any

from depcontainer.config.settings import DepSettings
from depcontainer.fields.container import DependencyContainer
from depcontainer.plugins.manager import PluginManager
from depcontainer.services.evaluator import DependencyEvaluator
from depcontainer.services.result import ServiceResult

logger = logging.getLogger(__name__)

NO_RULES_WARNING = "Container has no dependencies; the fill gate is always closed"


class PreviewService:
    """Load definitions and data files and run either evaluation pass."""

    def __init__(
        self,
        settings: DepSettings | None = None,
        plugins: PluginManager | None = None,
    ) -> None:
        self._settings = settings or DepSettings()
        self._plugins = plugins

    @property
    def plugins(self) -> PluginManager:
        """Plugin manager with entry-point strategies loaded."""
        if self._plugins is None:
            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    def list_rules(self, definition_path: Path) -> ServiceResult:
        """Parse a definition and report its rules."""
        op = "list_rules"
        container, error = self._load_container(op, definition_path)
        if error is not None:
            return error

        warnings = [] if container.rules else [NO_RULES_WARNING]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "attribute": container.attribute,
                "count": len(container.rules),
                "items": [
                    {
                        "field": rule.field,
                        "property": rule.property,
                        "kind": str(rule.kind),
                        "operand": _jsonable(rule.operand),
                    }
                    for rule in container.rules
                ],
            },
            warnings=warnings,
        )

    def evaluate(
        self,
        definition_path: Path,
        data_path: Path,
        *,
        mode: str = "display",
        as_object: bool = False,
    ) -> ServiceResult:
        """Evaluate a definition against a data file.

        Args:
            definition_path: JSON container metadata.
            data_path: JSON object with the resource or request values.
            mode: ``"display"`` or ``"fill"``.
            as_object: Treat display data as an object resource, which
                enables the polymorphic discriminator fallback.
        """
        op = f"evaluate_{mode}"
        if mode not in ("display", "fill"):
            return ServiceResult.failure(op, "INVALID_MODE", f"Unknown mode: {mode}")

        container, error = self._load_container(op, definition_path)
        if error is not None:
            return error

        payload, error = _read_json(op, data_path)
        if error is not None:
            return error
        if not isinstance(payload, dict):
            return ServiceResult.failure(
                op,
                "INVALID_DATA",
                "Data file must contain a JSON object",
                path=str(data_path),
            )

        warnings = [] if container.rules else [NO_RULES_WARNING]

        if mode == "display":
            resource: Any = SimpleNamespace(**payload) if as_object else payload
            container.resolve_for_display(resource)
            dependencies = container.dependencies
            satisfied_count = sum(1 for entry in dependencies if entry["satisfied"])
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "attribute": container.attribute,
                    "satisfied_count": satisfied_count,
                    "total": len(dependencies),
                    "dependencies": _jsonable(dependencies),
                },
                warnings=warnings,
            )

        gate = container.are_dependencies_satisfied(payload)
        breakdown = container.evaluator.evaluate_for_fill(container.rules, payload)
        logger.debug("Fill gate for %s: %s", definition_path, gate)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "attribute": container.attribute,
                "satisfied": gate,
                "dependencies": _jsonable([evaluation.to_meta() for evaluation in breakdown]),
            },
            warnings=warnings,
        )

    def _load_container(
        self,
        op: str,
        definition_path: Path,
    ) -> tuple[DependencyContainer, None] | tuple[None, ServiceResult]:
        raw, error = _read_json(op, definition_path)
        if error is not None:
            return None, error

        meta = {"dependencies": raw} if isinstance(raw, list) else raw
        if not isinstance(meta, dict) or not isinstance(meta.get("dependencies", []), list):
            return None, ServiceResult.failure(
                op,
                "INVALID_DEFINITION",
                "Definition must be an object with a 'dependencies' list",
                path=str(definition_path),
            )

        evaluator = DependencyEvaluator(self._settings.evaluation, self.plugins)
        try:
            container = DependencyContainer.from_meta(
                meta,
                evaluator=evaluator,
                config=self._settings.container,
            )
        except ValueError as exc:
            return None, ServiceResult.failure(
                op,
                "INVALID_DEFINITION",
                str(exc),
                path=str(definition_path),
            )
        return container, None


def _read_json(op: str, path: Path) -> tuple[Any, ServiceResult | None]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None, ServiceResult.failure(op, "FILE_NOT_FOUND", f"No such file: {path}")
    except (OSError, UnicodeDecodeError) as exc:
        return None, ServiceResult.failure(
            op,
            "UNREADABLE_FILE",
            f"Cannot read {path}: {exc}",
            path=str(path),
        )
    try:
        return json.loads(text), None
    except json.JSONDecodeError as exc:
        return None, ServiceResult.failure(
            op,
            "INVALID_JSON",
            f"Invalid JSON in {path}: {exc}",
            path=str(path),
        )


def _jsonable(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_jsonable(item) for item in value]
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    return value
