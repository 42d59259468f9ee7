"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the preview service and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from depcontainer.config.logging import configure_logging
from depcontainer.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from depcontainer.config.settings import DepSettings
    from depcontainer.services.preview import PreviewService
    from depcontainer.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: DepSettings) -> None:
        self.settings = settings
        self._preview: PreviewService | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def preview(self) -> PreviewService:
        """The preview service (created lazily so ``--help`` loads no plugins)."""
        if self._preview is None:
            from depcontainer.services.preview import PreviewService

            self._preview = PreviewService(self.settings)
        return self._preview

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
