"""Click base classes shared by every interop command.

Each command declares sample invocations (``interop run deploy env=prod``
and friends) through ``examples=``; ``interop <cmd> --examples`` prints them
and exits without running the command itself.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class InteropCommand(click.Command):
    """Leaf command (``run``, ``validate``, ``edit``...) with ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class InteropGroup(click.Group):
    """Command group (the root CLI, ``command``, ``project``) with ``--examples``.

    Subcommands declared with ``@group.command(examples=...)`` become
    :class:`InteropCommand` instances.
    """

    command_class = InteropCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)
