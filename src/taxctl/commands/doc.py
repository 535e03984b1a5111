"""Command group: attach and inspect documents."""

from __future__ import annotations

from pathlib import Path as FilePath
from typing import TYPE_CHECKING

import click

from taxctl.commands._base import TaxGroup
from taxctl.commands._params import DOMAIN_PATH

if TYPE_CHECKING:
    from taxctl.commands._context import AppContext
    from taxctl.domain.paths import Path

_DOC_EXAMPLES = """\
  taxctl doc add notes.md
  taxctl doc add paper.txt --name "Lecture 1" --at Physics/Optics
  taxctl doc list
  taxctl doc show notes.md
  taxctl doc clear"""

_at_option = click.option(
    "--at",
    "at",
    type=DOMAIN_PATH,
    default=None,
    help="Domain path (default: current path).",
)


@click.group(cls=TaxGroup, examples=_DOC_EXAMPLES)
def doc() -> None:
    """Attach text documents to domains."""


@doc.command(
    examples="""\
  taxctl doc add notes.md
  taxctl doc add draft.txt --name Summary
  taxctl doc add paper.txt --at Physics/Optics"""
)
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=FilePath),
)
@click.option("--name", default=None, help="Document name (default: the file name).")
@_at_option
@click.pass_obj
def add(app: AppContext, file: FilePath, name: str | None, at: Path | None) -> None:
    """Read FILE and attach it as a document."""
    from taxctl.services.documents import DocumentService

    app.emit(DocumentService(app.workspace).add_file(file, name=name, at=at))


@doc.command("list", examples="  taxctl doc list\n  taxctl doc list --at Physics")
@_at_option
@click.pass_obj
def list_cmd(app: AppContext, at: Path | None) -> None:
    """List documents at the current (or given) path."""
    from taxctl.services.documents import DocumentService

    app.emit(DocumentService(app.workspace).list_documents(at=at))


@doc.command(examples="  taxctl doc show notes.md\n  taxctl doc show Summary --at Physics")
@click.argument("name")
@_at_option
@click.pass_obj
def show(app: AppContext, name: str, at: Path | None) -> None:
    """Print the content of document NAME."""
    from taxctl.services.documents import DocumentService

    app.emit(DocumentService(app.workspace).show(name, at=at))


@doc.command(examples="  taxctl doc clear")
@click.pass_obj
def clear(app: AppContext) -> None:
    """Remove every document; domains are kept."""
    from taxctl.services.documents import DocumentService

    app.emit(DocumentService(app.workspace).clear())
