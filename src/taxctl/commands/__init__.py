"""Subcommand modules for taxctl.

Provides register_commands() which uses deferred imports to keep
``taxctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from taxctl.commands.config_cmd import config
    from taxctl.commands.doc import doc
    from taxctl.commands.domain import domain
    from taxctl.commands.nav import nav

    cli.add_command(domain)
    cli.add_command(nav)
    cli.add_command(doc)
    cli.add_command(config)

    # --- Standalone commands ---
    from taxctl.commands.check import check
    from taxctl.commands.init_cmd import init_cmd
    from taxctl.commands.reset import reset
    from taxctl.commands.status import status

    cli.add_command(init_cmd)
    cli.add_command(status)
    cli.add_command(check)
    cli.add_command(reset)
