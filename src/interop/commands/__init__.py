"""Subcommand modules for interop.

Provides register_commands() which uses deferred imports to keep
``interop --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    2 groups (have subcommands) + 4 standalone commands.
    """
    # --- Groups ---
    from interop.commands.command import command
    from interop.commands.project import project

    cli.add_command(command)
    cli.add_command(project)

    # --- Standalone commands ---
    from interop.commands.edit import edit
    from interop.commands.run import run
    from interop.commands.serve import serve
    from interop.commands.validate import validate

    cli.add_command(run)
    cli.add_command(validate)
    cli.add_command(edit)
    cli.add_command(serve)
