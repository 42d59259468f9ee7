"""Shared pytest fixtures and test helpers for depcontainer tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner


class RecordingField:
    """Child field double that records every call made by a container."""

    def __init__(self, name: str, deferred: Callable[[], Any] | None = None) -> None:
        self.name = name
        self.deferred = deferred
        self.calls: list[tuple[str, Any]] = []

    def resolve_for_display(self, resource: Any, attribute: str | None = None) -> None:
        self.calls.append(("resolve_for_display", resource))

    def resolve(self, resource: Any, attribute: str | None = None) -> None:
        self.calls.append(("resolve", (resource, attribute)))

    def fill(self, request: Any, model: Any) -> Callable[[], Any] | None:
        self.calls.append(("fill", (request, model)))
        return self.deferred


class Model:
    """Plain attribute bag standing in for an ORM model."""

    def __init__(self, **attributes: Any) -> None:
        for key, value in attributes.items():
            setattr(self, key, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write a JSON payload into tmp_path and return its path."""

    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no config discovery env var."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DEPCONTAINER_CONFIG", raising=False)


@pytest.fixture
def recording_field() -> type[RecordingField]:
    """The RecordingField class, for building child field doubles."""
    return RecordingField


@pytest.fixture
def model_cls() -> type[Model]:
    """The Model attribute-bag class."""
    return Model
