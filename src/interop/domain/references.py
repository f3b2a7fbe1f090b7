"""CommandReference: the outcome of resolving a user-supplied name."""

from __future__ import annotations

from pydantic import BaseModel

from interop.domain.commands import CommandDefinition
from interop.domain.types import ReferenceKind


class CommandReference(BaseModel):
    """A resolved command plus the context it was resolved in.

    ``project`` is set for the project and alias kinds; ``invoked_as`` is
    the literal name or alias the caller typed.  Frozen and compared by
    value, so resolving the same name twice yields equal references.
    """

    model_config = {"frozen": True}

    kind: ReferenceKind
    command_name: str
    definition: CommandDefinition
    project: str | None = None
    invoked_as: str

    @property
    def is_global(self) -> bool:
        return self.kind == ReferenceKind.GLOBAL
