"""run: execute a configured command by name or alias."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from interop.commands._base import InteropCommand

if TYPE_CHECKING:
    from interop.commands._context import AppContext


@click.command(
    cls=InteropCommand,
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
    examples="""\
  # Run a global command
  interop run build

  # Named and positional arguments
  interop run deploy env=staging --force
  interop run greet Alice

  # Run a global command inside a specific directory
  interop run --project-path ~/code/api lint

  # Show the invocation record
  interop -v run build
  interop --json run build""",
)
@click.option(
    "--project-path",
    default=None,
    help="Working directory for global commands (ignored for project-bound ones).",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Kill the main command after this many seconds.",
)
@click.argument("name")
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def run(
    app: AppContext,
    project_path: str | None,
    timeout: float | None,
    name: str,
    tokens: tuple[str, ...],
) -> None:
    """Run command NAME with TOKENS (key=value or positional values).

    Everything after NAME is passed to the command.  Output streams
    straight to the terminal unless --json is given.
    """
    from interop.services.invocation import InvocationService

    svc = InvocationService(app.settings)
    result = svc.run_tokens(
        name,
        tokens,
        project_path=project_path,
        timeout=timeout,
        capture=app.settings.json_output,
    )
    app.emit(result, quiet_success=True)
