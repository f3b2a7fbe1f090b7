"""Shell detection and argv construction for rendered commands.

A rendered command string becomes a process in one of several ways:

* plain text runs through the user's shell (``$SHELL -c``, default ``/bin/sh``)
* ``alias:<name> ...`` runs through an interactive shell so shell aliases load
* ``./script ...`` runs a script relative to the working directory directly
* hooks starting with ``interop `` re-invoke this tool with the running
  interpreter (``python -m interop ...``)
"""

from __future__ import annotations

import os
import shlex
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from interop.domain.types import ExecutionMode

ALIAS_PREFIX = "alias:"
LOCAL_SCRIPT_PREFIX = "./"
SELF_PREFIX = "interop "
DEFAULT_SHELL = "/bin/sh"


@dataclass(frozen=True)
class ShellInfo:
    """The shell used to run non-executable commands and hooks."""

    path: str
    name: str
    option: str = "-c"

    def argv(self, command: str, *, interactive: bool = False) -> list[str]:
        option = "-ic" if interactive else self.option
        return [self.path, option, command]


def detect_shell(environ: Mapping[str, str] | None = None) -> ShellInfo:
    """Return the user's shell from ``$SHELL``, falling back to ``/bin/sh``."""
    env = os.environ if environ is None else environ
    shell = env.get("SHELL", "")
    if not shell:
        return ShellInfo(path=DEFAULT_SHELL, name="sh")
    return ShellInfo(path=shell, name=Path(shell).name)


def execution_mode(command: str, *, is_executable: bool = False) -> ExecutionMode:
    """Classify a rendered main command."""
    stripped = command.lstrip()
    if stripped.startswith(ALIAS_PREFIX):
        return ExecutionMode.ALIAS
    if stripped.startswith(LOCAL_SCRIPT_PREFIX):
        return ExecutionMode.LOCAL_SCRIPT
    if is_executable:
        return ExecutionMode.EXECUTABLE
    return ExecutionMode.SHELL


def strip_alias(command: str) -> str:
    return command.lstrip()[len(ALIAS_PREFIX) :].strip()


def is_self_invocation(hook: str) -> bool:
    return hook.lstrip().startswith(SELF_PREFIX)


def self_argv(hook: str) -> list[str]:
    """argv that re-runs this CLI with the hook's arguments."""
    words = shlex.split(hook)
    return [sys.executable, "-m", "interop", *words[1:]]


def hook_argv(hook: str, shell: ShellInfo) -> list[str]:
    if is_self_invocation(hook):
        return self_argv(hook)
    return shell.argv(hook)
