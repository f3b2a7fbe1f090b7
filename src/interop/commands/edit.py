"""edit: open the settings file in $EDITOR."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from interop.commands._base import InteropCommand

if TYPE_CHECKING:
    from interop.commands._context import AppContext


@click.command(
    cls=InteropCommand,
    examples="""\
  interop edit
  EDITOR=nano interop edit
  interop -c ./settings.toml edit""",
)
@click.pass_obj
def edit(app: AppContext) -> None:
    """Open the settings file in your editor, creating it if missing."""
    from interop.config.discovery import configured_path, ensure_config

    path = ensure_config(app.settings.config_path or configured_path())
    click.echo(f"Editing {path}", err=True)
    click.edit(filename=str(path))
