"""validate: check the configuration for conflicts and bad paths."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from interop.commands._base import InteropCommand

if TYPE_CHECKING:
    from interop.commands._context import AppContext


@click.command(
    cls=InteropCommand,
    examples="""\
  interop validate
  interop -v validate
  interop --json validate""",
)
@click.pass_obj
def validate(app: AppContext) -> None:
    """Validate the configuration.

    Exits non-zero when any issue would block command execution.
    """
    from interop.services.validation import ValidationService

    app.emit(ValidationService(app.settings).validate())
