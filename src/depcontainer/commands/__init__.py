"""Subcommand modules for depcontainer.

Provides register_commands() which uses deferred imports to keep
``depcontainer --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from depcontainer.commands.evaluate import evaluate, rules

    cli.add_command(evaluate)
    cli.add_command(rules)
