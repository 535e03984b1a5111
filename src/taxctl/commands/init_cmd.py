"""Command: seed the taxonomy with its root domains."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taxctl.commands._base import TaxCommand

if TYPE_CHECKING:
    from taxctl.commands._context import AppContext


@click.command(
    "init",
    cls=TaxCommand,
    examples="""\
  taxctl init Physics Biology "Computer Science"
  taxctl init --force Math Chemistry Linguistics
  taxctl --json init A B C""",
)
@click.argument("names", nargs=-1, required=True)
@click.option("--force", is_flag=True, help="Discard the existing taxonomy and start over.")
@click.pass_obj
def init_cmd(app: AppContext, names: tuple[str, ...], force: bool) -> None:
    """Create the root domains (at least 3 are required)."""
    from taxctl.services.domains import DomainService

    app.emit(DomainService(app.workspace).setup(names, force=force))
