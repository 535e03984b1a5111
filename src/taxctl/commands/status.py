"""Command: summarize the workspace."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taxctl.commands._base import TaxCommand

if TYPE_CHECKING:
    from taxctl.commands._context import AppContext


@click.command(cls=TaxCommand, examples="  taxctl status\n  taxctl --json status")
@click.pass_obj
def status(app: AppContext) -> None:
    """Show storage location, counts, and the current path."""
    from taxctl.services.workspace import WorkspaceService

    app.emit(WorkspaceService(app.workspace).status())
