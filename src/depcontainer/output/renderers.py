"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from depcontainer.domain.rules import META_KEYS
from depcontainer.output.console import create_console, get_output, style_for_satisfied

if TYPE_CHECKING:
    from rich.console import Console

    from depcontainer.services.result import ServiceResult

# Serialized condition key -> kind name shown in tables.
_KIND_BY_META_KEY: dict[str, str] = {key: str(kind) for kind, key in META_KEYS.items()}


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="dep.ok")
    op = Text(f"  {result.op}", style="dep.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dep.key")
    if isinstance(value, bool):
        v = Text(str(value).lower(), style=style_for_satisfied(value))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _condition(entry: dict[str, Any]) -> tuple[str, str]:
    """Return ``(kind, operand)`` display strings for a serialized dependency."""
    for key, kind in _KIND_BY_META_KEY.items():
        if key not in entry:
            continue
        if key in ("empty", "notEmpty", "nullOrZero"):
            return kind, ""
        return kind, _json.dumps(entry[key])
    return "?", ""


def _dependency_table(entries: list[dict[str, Any]]) -> Table:
    """Build a Rich Table for serialized dependencies with ``satisfied``."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="dep.field", no_wrap=True)
    table.add_column("Property")
    table.add_column("Condition", style="dep.kind")
    table.add_column("Operand")
    table.add_column("Satisfied")

    for entry in entries:
        kind, operand = _condition(entry)
        satisfied = bool(entry.get("satisfied"))
        table.add_row(
            str(entry.get("field", "")),
            str(entry.get("property", "")),
            kind,
            operand,
            Text("yes" if satisfied else "no", style=style_for_satisfied(satisfied)),
        )
    return table


def _print_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text.assemble(("  warning: ", "dep.warning"), warning))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dep.error")
    op = Text(f"  {result.op}", style="dep.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Evaluation renderers ──────────────────────────────────────────────


def _render_display(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a display pass: per-rule table plus the satisfied tally."""
    d = result.data
    _status_line(console, result)
    _field(console, "satisfied", f"{d.get('satisfied_count', 0)}/{d.get('total', 0)}")
    if d.get("dependencies"):
        console.print()
        console.print(_dependency_table(d["dependencies"]))
    _print_warnings(console, result)


def _render_fill(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a fill-gate pass: the gate outcome, breakdown when verbose or closed."""
    d = result.data
    _status_line(console, result)
    gate = bool(d.get("satisfied"))
    _field(console, "fillable", gate)
    if d.get("dependencies") and (verbose or not gate):
        console.print()
        console.print(_dependency_table(d["dependencies"]))
    _print_warnings(console, result)


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render parsed rules as a table."""
    _status_line(console, result)
    _field(console, "count", result.data.get("count", 0))
    items = result.data.get("items", [])
    if items:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Field", style="dep.field", no_wrap=True)
        table.add_column("Property")
        table.add_column("Condition", style="dep.kind")
        table.add_column("Operand")
        for item in items:
            operand = item.get("operand")
            table.add_row(
                str(item.get("field", "")),
                str(item.get("property", "")),
                str(item.get("kind", "")),
                "" if operand is None else _json.dumps(operand),
            )
        console.print()
        console.print(table)
    _print_warnings(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    _print_warnings(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "evaluate_display": _render_display,
    "evaluate_fill": _render_fill,
    "list_rules": _render_rules,
}
