"""Tests for operation-specific Rich renderers."""

from __future__ import annotations

from depcontainer.output.renderers import render_result
from depcontainer.services.result import ServiceError, ServiceResult


def _display_result() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="evaluate_display",
        data={
            "attribute": "section",
            "satisfied_count": 1,
            "total": 2,
            "dependencies": [
                {"field": "role", "property": "role", "value": "admin", "satisfied": True},
                {"field": "tags", "property": "tags", "empty": True, "satisfied": False},
            ],
        },
    )


def _fill_result(gate: bool) -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="evaluate_fill",
        data={
            "attribute": "section",
            "satisfied": gate,
            "dependencies": [
                {"field": "status", "property": "status", "notin": ["archived"], "satisfied": gate},
            ],
        },
    )


class TestDisplayRenderer:
    def test_table_and_tally(self) -> None:
        output = render_result(_display_result())
        assert "evaluate_display" in output
        assert "1/2" in output
        assert "role" in output
        assert "equals" in output
        assert '"admin"' in output
        assert "empty" in output
        assert "yes" in output
        assert "no" in output


class TestFillRenderer:
    def test_open_gate_hides_breakdown(self) -> None:
        output = render_result(_fill_result(True))
        assert "fillable: true" in output
        assert "notIn" not in output

    def test_open_gate_verbose_shows_breakdown(self) -> None:
        output = render_result(_fill_result(True), verbose=True)
        assert "notIn" in output

    def test_closed_gate_shows_breakdown(self) -> None:
        output = render_result(_fill_result(False))
        assert "fillable: false" in output
        assert "notIn" in output
        assert '["archived"]' in output


class TestRulesRenderer:
    def test_lists_rules(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_rules",
            data={
                "attribute": "",
                "count": 1,
                "items": [{"field": "a", "property": "b", "kind": "in", "operand": [1, 2]}],
            },
            warnings=[],
        )
        output = render_result(result)
        assert "count: 1" in output
        assert "[1, 2]" in output

    def test_warnings_rendered(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_rules",
            data={"attribute": "", "count": 0, "items": []},
            warnings=["no rules"],
        )
        assert "warning: no rules" in render_result(result)


class TestErrorRenderer:
    def test_verbose_detail(self) -> None:
        result = ServiceResult(
            ok=False,
            op="list_rules",
            error=ServiceError(code="INVALID_JSON", message="bad", detail={"path": "x.json"}),
        )
        assert "path: x.json" in render_result(result, verbose=True)
        assert "path: x.json" not in render_result(result)
