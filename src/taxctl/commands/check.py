"""Command: report stored data that no domain can reach."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taxctl.commands._base import TaxCommand

if TYPE_CHECKING:
    from taxctl.commands._context import AppContext


@click.command(cls=TaxCommand, examples="  taxctl check\n  taxctl --json check")
@click.pass_obj
def check(app: AppContext) -> None:
    """List orphaned subdomain lists and documents."""
    from taxctl.services.check import CheckService

    app.emit(CheckService(app.workspace).check())
