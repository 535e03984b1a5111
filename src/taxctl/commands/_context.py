"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Workspace initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from taxctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from taxctl.config.settings import TaxSettings
    from taxctl.infrastructure.workspace import Workspace
    from taxctl.services.result import ServiceResult

LOADING_MESSAGE = "Loading your domain data..."


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is opened lazily on first use so ``--help`` and
    ``--version`` never touch the database.
    """

    def __init__(self, settings: TaxSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from taxctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        """The opened workspace (loaded on first access)."""
        if self._workspace is None:
            from taxctl.infrastructure.workspace import Workspace

            workspace = Workspace(self.settings)
            if self._show_spinner():
                from rich.console import Console

                with Console(stderr=True).status(LOADING_MESSAGE):
                    workspace.open()
            else:
                workspace.open()
            self._workspace = workspace
        return self._workspace

    def close(self) -> None:
        """Drain background saves. Registered with ``ctx.call_on_close``."""
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def _show_spinner(self) -> bool:
        if self.settings.quiet or self.settings.json_output:
            return False
        return sys.stderr.isatty()
