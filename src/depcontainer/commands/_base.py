"""Click command class carrying an on-demand ``--examples`` flag.

``--help`` stays short; ``depcontainer <command> --examples`` prints the
worked invocations attached to the command and exits.
"""

from __future__ import annotations

from typing import Any

import click


class DepCommand(click.Command):
    """Command accepting ``examples=`` and exposing them via ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    is_eager=True,
                    expose_value=False,
                    callback=self._print_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)
