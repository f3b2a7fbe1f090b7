"""Identity resolution: turn a user-typed name or alias into a command reference.

Lookup order:
  1. A command key.  It is project-bound if some project lists it without an
     alias (first such project in name order); otherwise it is global.
  2. A project alias (projects scanned in name order).

The resolver never arbitrates duplicate bindings or aliases; that is the
validator's job.  Resolution is pure: the same settings and name always
produce an equal reference.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from interop.domain.errors import CommandNotFoundError
from interop.domain.references import CommandReference
from interop.domain.types import ReferenceKind

if TYPE_CHECKING:
    from interop.config.settings import InteropSettings


def resolve_command(settings: InteropSettings, name_or_alias: str) -> CommandReference:
    """Resolve *name_or_alias* against the configured commands and projects.

    Raises:
        CommandNotFoundError: Nothing matches, or an alias points at a
            command that does not exist.
    """
    projects = sorted(settings.projects.items())

    definition = settings.commands.get(name_or_alias)
    if definition is not None:
        for project_name, project in projects:
            for binding in project.commands:
                if binding.command_name == name_or_alias and binding.alias is None:
                    return CommandReference(
                        kind=ReferenceKind.PROJECT,
                        command_name=name_or_alias,
                        definition=definition,
                        project=project_name,
                        invoked_as=name_or_alias,
                    )
        return CommandReference(
            kind=ReferenceKind.GLOBAL,
            command_name=name_or_alias,
            definition=definition,
            invoked_as=name_or_alias,
        )

    for project_name, project in projects:
        for binding in project.commands:
            if binding.alias != name_or_alias:
                continue
            target = settings.commands.get(binding.command_name)
            if target is None:
                msg = (
                    f"alias '{name_or_alias}' in project '{project_name}' "
                    f"references non-existent command '{binding.command_name}'"
                )
                raise CommandNotFoundError(
                    msg,
                    name=name_or_alias,
                    project=project_name,
                    command=binding.command_name,
                )
            return CommandReference(
                kind=ReferenceKind.ALIAS,
                command_name=binding.command_name,
                definition=target,
                project=project_name,
                invoked_as=name_or_alias,
            )

    msg = f"command or alias '{name_or_alias}' not found"
    raise CommandNotFoundError(msg, name=name_or_alias)
