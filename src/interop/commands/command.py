"""command: inspect configured commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from interop.commands._base import InteropGroup

if TYPE_CHECKING:
    from interop.commands._context import AppContext


@click.group(
    cls=InteropGroup,
    examples="""\
  interop command list
  interop command list --enabled
  interop -v command list
  interop -q command list""",
)
def command() -> None:
    """Inspect configured commands."""


@command.command(
    "list",
    examples="""\
  interop command list
  interop command list --enabled
  interop --json command list""",
)
@click.option("--enabled", "enabled_only", is_flag=True, help="Hide disabled commands.")
@click.pass_obj
def list_cmd(app: AppContext, enabled_only: bool) -> None:
    """List commands with their projects and aliases."""
    from interop.services.catalog import CatalogService

    app.emit(CatalogService(app.settings).list_commands(enabled_only=enabled_only))
