"""Command group: breadcrumb navigation through the taxonomy."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taxctl.commands._base import TaxGroup
from taxctl.commands._params import DOMAIN_PATH

if TYPE_CHECKING:
    from taxctl.commands._context import AppContext
    from taxctl.domain.paths import Path

_NAV_EXAMPLES = """\
  taxctl nav show
  taxctl nav select Physics
  taxctl nav up 1
  taxctl nav up
  taxctl nav go Physics/Optics"""


@click.group(cls=TaxGroup, examples=_NAV_EXAMPLES)
def nav() -> None:
    """Move the current path and show what is visible there."""


@nav.command(examples="  taxctl nav show")
@click.pass_obj
def show(app: AppContext) -> None:
    """Show breadcrumbs, domains, and documents at the current path."""
    from taxctl.services.navigation import NavigationService

    app.emit(NavigationService(app.workspace).show())


@nav.command(examples="  taxctl nav select Physics")
@click.argument("name")
@click.pass_obj
def select(app: AppContext, name: str) -> None:
    """Descend into the domain NAME."""
    from taxctl.services.navigation import NavigationService

    app.emit(NavigationService(app.workspace).select(name))


@nav.command(
    examples="""\
  taxctl nav up      # back to Home
  taxctl nav up 2    # keep the first two breadcrumbs"""
)
@click.argument("level", type=click.IntRange(min=0), default=0)
@click.pass_obj
def up(app: AppContext, level: int) -> None:
    """Jump back to breadcrumb LEVEL (0 = Home)."""
    from taxctl.services.navigation import NavigationService

    app.emit(NavigationService(app.workspace).up(level))


@nav.command(examples="  taxctl nav go Physics/Optics\n  taxctl nav go /")
@click.argument("path", type=DOMAIN_PATH)
@click.pass_obj
def go(app: AppContext, path: Path) -> None:
    """Jump straight to PATH."""
    from taxctl.services.navigation import NavigationService

    app.emit(NavigationService(app.workspace).go(path))
