"""evaluate / rules commands: check container definitions against sample data."""

from __future__ import annotations

from pathlib import Path

import click

from depcontainer.commands._base import DepCommand
from depcontainer.commands._context import AppContext

_EVALUATE_EXAMPLES = """\
  depcontainer evaluate container.json post.json
  depcontainer evaluate container.json post.json --object
  depcontainer evaluate container.json request.json --mode fill
  depcontainer --json evaluate container.json request.json --mode fill"""

_RULES_EXAMPLES = """\
  depcontainer rules container.json
  depcontainer --json rules container.json"""

_existing_file = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.command(cls=DepCommand, examples=_EVALUATE_EXAMPLES)
@click.argument("definition", type=_existing_file)
@click.argument("data", type=_existing_file)
@click.option(
    "--mode",
    type=click.Choice(["display", "fill"]),
    default="display",
    show_default=True,
    help="Evaluate against a stored resource or submitted request data.",
)
@click.option(
    "--object",
    "as_object",
    is_flag=True,
    help="Treat display data as an object resource (enables the discriminator fallback).",
)
@click.pass_obj
def evaluate(app: AppContext, definition: Path, data: Path, mode: str, as_object: bool) -> None:
    """Evaluate a container DEFINITION's dependencies against DATA."""
    app.emit(app.preview.evaluate(definition, data, mode=mode, as_object=as_object))


@click.command(cls=DepCommand, examples=_RULES_EXAMPLES)
@click.argument("definition", type=_existing_file)
@click.pass_obj
def rules(app: AppContext, definition: Path) -> None:
    """List the dependency rules declared in DEFINITION."""
    app.emit(app.preview.list_rules(definition))
