"""Command, argument, and project models.

The TOML form of a command may be either a bare string (shorthand for
``{cmd = "..."}``) or a full table.  Both are normalised into the one
canonical :class:`CommandDefinition` at parse time, so nothing downstream
has to care which form the user wrote.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from interop.domain.types import ArgumentType

ArgumentValue = str | int | float | bool


class ArgumentDefinition(BaseModel):
    """One declared argument of a command.  Order within a command matters."""

    model_config = {"frozen": True}

    name: str
    type: ArgumentType = ArgumentType.STRING
    description: str = ""
    required: bool = False
    default: ArgumentValue | None = None
    prefix: str = ""

    @property
    def is_positional(self) -> bool:
        return not self.prefix


class CommandDefinition(BaseModel):
    """A named command template plus its execution policy."""

    model_config = {"frozen": True}

    name: str = ""
    cmd: str = ""
    description: str = ""
    is_enabled: bool = True
    is_executable: bool = False
    mcp: str | None = None
    env: dict[str, str] = Field(default_factory=dict)
    pre_exec: list[str] = Field(default_factory=list)
    post_exec: list[str] = Field(default_factory=list)
    arguments: list[ArgumentDefinition] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"cmd": data}
        return data

    @field_validator("arguments")
    @classmethod
    def _unique_argument_names(cls, value: list[ArgumentDefinition]) -> list[ArgumentDefinition]:
        seen: set[str] = set()
        for arg in value:
            if arg.name in seen:
                msg = f"duplicate argument name '{arg.name}'"
                raise ValueError(msg)
            seen.add(arg.name)
        return value

    def argument(self, name: str) -> ArgumentDefinition | None:
        """Return the argument definition called *name*, if declared."""
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None


class ProjectBinding(BaseModel):
    """A command attached to a project, optionally under an alias."""

    model_config = {"frozen": True}

    command_name: str
    alias: str | None = None

    @field_validator("alias", mode="before")
    @classmethod
    def _empty_alias_is_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


class Project(BaseModel):
    """A named working directory with its own environment and bindings."""

    model_config = {"frozen": True}

    name: str = ""
    path: str
    description: str = ""
    env: dict[str, str] = Field(default_factory=dict)
    commands: list[ProjectBinding] = Field(default_factory=list)
