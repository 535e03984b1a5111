"""Command: wipe the taxonomy and start over."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taxctl.commands._base import TaxCommand

if TYPE_CHECKING:
    from taxctl.commands._context import AppContext


@click.command(
    cls=TaxCommand,
    examples="""\
  taxctl reset
  taxctl reset --yes
  taxctl --no-interact reset""",
)
@click.option("-y", "--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def reset(app: AppContext, yes: bool) -> None:
    """Delete all domains and documents. Tree limits are kept."""
    from taxctl.services.workspace import WorkspaceService

    if not (yes or app.settings.no_interact):
        click.confirm("Delete every domain and document?", abort=True, err=True)
    app.emit(WorkspaceService(app.workspace).reset())
