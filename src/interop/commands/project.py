"""project: inspect configured projects."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from interop.commands._base import InteropGroup

if TYPE_CHECKING:
    from interop.commands._context import AppContext


@click.group(
    cls=InteropGroup,
    examples="""\
  interop project list
  interop project commands api""",
)
def project() -> None:
    """Inspect configured projects."""


@project.command(
    "list",
    examples="""\
  interop project list
  interop --json project list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List projects with their paths and path health."""
    from interop.services.catalog import CatalogService

    app.emit(CatalogService(app.settings).list_projects())


@project.command(
    "commands",
    examples="""\
  interop project commands api
  interop -q project commands api""",
)
@click.argument("name")
@click.pass_obj
def commands_cmd(app: AppContext, name: str) -> None:
    """List the commands bound to project NAME."""
    from interop.services.catalog import CatalogService

    app.emit(CatalogService(app.settings).project_commands(name))
