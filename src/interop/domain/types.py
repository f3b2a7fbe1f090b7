"""Classification enums for arguments, references, and invocations."""

from __future__ import annotations

from enum import StrEnum


class ArgumentType(StrEnum):
    """Declared type of a command argument."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"


class ReferenceKind(StrEnum):
    """How a user-supplied name resolved to a command."""

    GLOBAL = "global"
    PROJECT = "project"
    ALIAS = "alias"


class ArgumentSource(StrEnum):
    """Where a bound argument value came from."""

    EXPLICIT = "explicit"
    POSITIONAL = "positional"
    DEFAULT = "default"


class HookPhase(StrEnum):
    PRE = "pre"
    POST = "post"


class InvocationState(StrEnum):
    """Orchestrator states, in the order an invocation passes through them."""

    RESOLVED = "resolved"
    VALIDATED = "validated"
    PRE_HOOKS = "pre_hooks"
    MAIN_EXECUTING = "main_executing"
    POST_HOOKS = "post_hooks"
    DONE = "done"


class InvocationOutcome(StrEnum):
    """Terminal outcome of an invocation.

    ``rejected`` means nothing was spawned; ``aborted`` means a pre-hook
    failed and the main command never ran.
    """

    SUCCEEDED = "succeeded"
    MAIN_FAILED = "main_failed"
    ABORTED = "aborted"
    REJECTED = "rejected"


class ExecutionMode(StrEnum):
    """How a rendered command string is turned into a process."""

    SHELL = "shell"
    ALIAS = "alias"
    LOCAL_SCRIPT = "local_script"
    EXECUTABLE = "executable"
