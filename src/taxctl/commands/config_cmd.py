"""Command group: inspect and change tree limits."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taxctl.commands._base import TaxGroup

if TYPE_CHECKING:
    from taxctl.commands._context import AppContext


@click.group(
    "config",
    cls=TaxGroup,
    examples="""\
  taxctl config show
  taxctl config set --max-depth 4""",
)
def config() -> None:
    """Show or change the taxonomy configuration."""


@config.command(examples="  taxctl config show\n  taxctl --json config show")
@click.pass_obj
def show(app: AppContext) -> None:
    """Show the active tree configuration."""
    from taxctl.services.workspace import WorkspaceService

    app.emit(WorkspaceService(app.workspace).show_config())


@config.command("set", examples="  taxctl config set --max-depth 4")
@click.option("--max-depth", type=int, default=None, help="Deepest allowed domain level.")
@click.pass_obj
def set_cmd(app: AppContext, max_depth: int | None) -> None:
    """Change configuration values."""
    from taxctl.services.workspace import WorkspaceService

    changes = {}
    if max_depth is not None:
        changes["max_depth"] = max_depth
    if not changes:
        raise click.UsageError("Nothing to change. Pass at least one option, e.g. --max-depth.")
    app.emit(WorkspaceService(app.workspace).configure(**changes))
