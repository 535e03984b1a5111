"""Command group: add and browse domains."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taxctl.commands._base import TaxGroup
from taxctl.commands._params import DOMAIN_PATH

if TYPE_CHECKING:
    from taxctl.commands._context import AppContext
    from taxctl.domain.paths import Path

_DOMAIN_EXAMPLES = """\
  taxctl domain add Optics
  taxctl domain add Optics --at Physics
  taxctl domain list
  taxctl domain list Physics/Optics
  taxctl domain tree"""


@click.group(cls=TaxGroup, examples=_DOMAIN_EXAMPLES)
def domain() -> None:
    """Add root domains and subdomains, and browse the taxonomy."""


@domain.command(
    examples="""\
  taxctl domain add Optics
  taxctl domain add Lasers --at Physics/Optics
  taxctl domain add Linguistics --at /"""
)
@click.argument("name")
@click.option(
    "--at",
    "at",
    type=DOMAIN_PATH,
    default=None,
    help="Parent path (default: current path; '/' adds a root domain).",
)
@click.pass_obj
def add(app: AppContext, name: str, at: Path | None) -> None:
    """Add NAME below the current (or given) path."""
    from taxctl.services.domains import DomainService

    app.emit(DomainService(app.workspace).add(name, at=at))


@domain.command(
    "list",
    examples="""\
  taxctl domain list
  taxctl domain list /
  taxctl -q domain list Physics""",
)
@click.argument("path", type=DOMAIN_PATH, required=False)
@click.pass_obj
def list_cmd(app: AppContext, path: Path | None) -> None:
    """List domains directly below PATH (default: current path)."""
    from taxctl.services.domains import DomainService

    app.emit(DomainService(app.workspace).list_domains(at=path))


@domain.command(examples="  taxctl domain tree\n  taxctl --json domain tree")
@click.pass_obj
def tree(app: AppContext) -> None:
    """Show the whole taxonomy as a tree."""
    from taxctl.services.domains import DomainService

    app.emit(DomainService(app.workspace).tree())
