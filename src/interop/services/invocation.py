"""InvocationService: resolve, bind, render, and run one command.

State machine::

    resolved -> validated -> pre_hooks -> main_executing -> post_hooks -> done

Outcomes:
  * ``rejected``     resolution, validation, or binding failed; nothing spawned
  * ``aborted``      a pre-hook failed; the main command never ran
  * ``main_failed``  the main process exited non-zero or could not start
  * ``succeeded``    the main process exited zero

Post-hooks always run after the main process.  Their failures are recorded
in ``data["hooks"]`` and ``warnings`` and never change the outcome; the
returned error is always the main process's error or nothing.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable, Mapping, Sequence
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from interop.config.discovery import CONFIG_ENV_VAR
from interop.domain.errors import (
    ArgumentValidationError,
    CommandDisabledError,
    ConfigurationInvalidError,
    EmptyCommandTemplateError,
    ExecutableNotFoundError,
    ExecutableNotPermittedError,
    InteropError,
    PreHookFailedError,
    ProcessExecutionError,
    WorkingDirectoryMissingError,
)
from interop.domain.types import ExecutionMode, HookPhase, InvocationOutcome, InvocationState
from interop.infrastructure.invoker import Invoker, SpawnResult, SubprocessInvoker
from interop.infrastructure.paths import expand_path, find_executable, is_user_executable
from interop.infrastructure.shell import (
    ShellInfo,
    detect_shell,
    execution_mode,
    hook_argv,
    is_self_invocation,
    strip_alias,
)
from interop.services.base import BaseService
from interop.services.binding import BoundArguments, bind_mapping, bind_tokens
from interop.services.environment import merge_environment
from interop.services.rendering import render_command
from interop.services.resolver import resolve_command
from interop.services.result import ServiceResult
from interop.services.validation import severe_issues, validate_bindings, validate_config

if TYPE_CHECKING:
    from interop.config.settings import InteropSettings
    from interop.domain.commands import ArgumentDefinition, CommandDefinition
    from interop.domain.references import CommandReference

logger = logging.getLogger(__name__)

Binder = Callable[[Sequence["ArgumentDefinition"]], BoundArguments]


@dataclass(frozen=True)
class HookResult:
    """Outcome of one pre- or post-execution hook."""

    phase: HookPhase
    index: int
    command: str
    ok: bool
    exit_code: int
    error: str | None = None
    output: str | None = None


@dataclass(frozen=True)
class _Prepared:
    ref: CommandReference
    bound: BoundArguments
    command: str
    argv: list[str]
    cwd: Path
    env: dict[str, str]
    mode: ExecutionMode
    executable: Path | None


class InvocationService(BaseService):
    """Runs configured commands on behalf of the CLI and the MCP adapter."""

    def __init__(
        self,
        settings: InteropSettings,
        *,
        invoker: Invoker | None = None,
        shell: ShellInfo | None = None,
        inherited_env: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(settings)
        self._invoker = invoker or SubprocessInvoker()
        self._shell = shell or detect_shell()
        self._inherited_env = inherited_env

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run_tokens(
        self,
        name: str,
        tokens: Sequence[str] = (),
        *,
        project_path: str | None = None,
        timeout: float | None = None,
        capture: bool = False,
    ) -> ServiceResult:
        """Run *name* with CLI tokens (``key=value`` or bare positional)."""
        return self._run(
            name,
            lambda defs: bind_tokens(defs, tokens),
            pass_through=True,
            project_path=project_path,
            timeout=timeout,
            capture=capture,
        )

    def run_mapping(
        self,
        name: str,
        arguments: Mapping[str, Any] | None = None,
        *,
        project_path: str | None = None,
        timeout: float | None = None,
        capture: bool = True,
    ) -> ServiceResult:
        """Run *name* with a name -> value mapping (MCP tool calls)."""
        return self._run(
            name,
            lambda defs: bind_mapping(defs, arguments),
            pass_through=False,
            project_path=project_path,
            timeout=timeout,
            capture=capture,
        )

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    def _run(
        self,
        name: str,
        binder: Binder,
        *,
        pass_through: bool,
        project_path: str | None,
        timeout: float | None,
        capture: bool,
    ) -> ServiceResult:
        warnings: list[str] = []
        record: dict[str, Any] = {"invoked_as": name, "state": None}

        try:
            prepared = self._prepare(
                name, binder, record, warnings, pass_through=pass_through, project_path=project_path
            )
        except InteropError as exc:
            logger.debug("Rejected %s: %s", name, exc.message)
            record["outcome"] = InvocationOutcome.REJECTED
            return self._failure("run", exc, data=record, warnings=warnings)

        definition = prepared.ref.definition
        hooks: list[HookResult] = []
        record["hooks"] = hooks

        # --- Pre-hooks: first failure aborts ---
        record["state"] = InvocationState.PRE_HOOKS
        for index, hook in enumerate(definition.pre_exec):
            result = self._run_hook(HookPhase.PRE, index, hook, prepared, capture=capture)
            hooks.append(result)
            if not result.ok:
                logger.warning("Pre-execution hook %d failed: %s", index + 1, hook)
                exc = PreHookFailedError(
                    f"pre-execution hook {index + 1} failed: {hook}",
                    hook=hook,
                    index=index,
                    exit_code=result.exit_code,
                )
                record["outcome"] = InvocationOutcome.ABORTED
                return self._finish(record, hooks, warnings, error=exc)

        # --- Main process ---
        record["state"] = InvocationState.MAIN_EXECUTING
        effective_timeout = timeout if timeout is not None else self._settings.command_timeout
        logger.info("Executing %s: %s", prepared.ref.invoked_as, prepared.command)
        main = self._invoker.spawn(
            prepared.argv,
            cwd=prepared.cwd,
            env=prepared.env,
            timeout=effective_timeout,
            capture=capture,
        )
        record["exit_code"] = main.exit_code
        if capture:
            record["output"] = main.output

        # --- Post-hooks: always run, never fatal ---
        record["state"] = InvocationState.POST_HOOKS
        for index, hook in enumerate(definition.post_exec):
            result = self._run_hook(HookPhase.POST, index, hook, prepared, capture=capture)
            hooks.append(result)
            if not result.ok:
                logger.warning("Post-execution hook %d failed: %s", index + 1, hook)
                warnings.append(f"post-execution hook {index + 1} failed: {hook}")

        record["state"] = InvocationState.DONE
        if main.ok:
            record["outcome"] = InvocationOutcome.SUCCEEDED
            return self._finish(record, hooks, warnings)

        record["outcome"] = InvocationOutcome.MAIN_FAILED
        return self._finish(record, hooks, warnings, error=self._main_error(prepared, main))

    def _prepare(
        self,
        name: str,
        binder: Binder,
        record: dict[str, Any],
        warnings: list[str],
        *,
        pass_through: bool,
        project_path: str | None,
    ) -> _Prepared:
        ref = resolve_command(self._settings, name)
        record.update(
            {
                "state": InvocationState.RESOLVED,
                "name": ref.command_name,
                "kind": ref.kind,
                "project": ref.project,
            }
        )

        # Only binding conflicts block execution; a bad project path fails
        # just that project's commands, in _working_directory.
        issues = validate_config(self._settings)
        severe = severe_issues(validate_bindings(self._settings))
        if severe:
            msg = f"configuration has {len(severe)} severe issue(s); refusing to run"
            raise ConfigurationInvalidError(msg, issues=[i.message for i in severe])
        warnings.extend(i.message for i in issues)

        definition = ref.definition
        if not definition.is_enabled:
            msg = f"command '{ref.command_name}' is disabled"
            raise CommandDisabledError(msg, command=ref.command_name)
        if not definition.cmd.strip():
            msg = f"command '{ref.command_name}' has an empty command template"
            raise EmptyCommandTemplateError(msg, command=ref.command_name)

        bound = binder(definition.arguments)
        command = render_command(
            definition.cmd, definition.arguments, bound, pass_through=pass_through
        )
        record["command"] = command
        record["arguments"] = dict(bound.values)

        cwd = self._working_directory(ref, project_path, warnings)
        record["cwd"] = str(cwd)

        mode = execution_mode(command, is_executable=definition.is_executable)
        argv, executable = self._main_argv(definition, command, mode, cwd)
        record["mode"] = mode
        record["executable"] = str(executable) if executable else None

        project = self._settings.projects.get(ref.project) if ref.project else None
        env = merge_environment(
            definition.env,
            project.env if project else None,
            self._settings.env,
            self._inherited_env,
        )

        record["state"] = InvocationState.VALIDATED
        return _Prepared(
            ref=ref,
            bound=bound,
            command=command,
            argv=argv,
            cwd=cwd,
            env=env,
            mode=mode,
            executable=executable,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _working_directory(
        self, ref: CommandReference, project_path: str | None, warnings: list[str]
    ) -> Path:
        if ref.project is not None:
            if project_path:
                warnings.append(
                    f"project_path ignored: '{ref.invoked_as}' runs in project '{ref.project}'"
                )
            raw = self._settings.projects[ref.project].path
        elif project_path:
            raw = project_path
        else:
            return Path.cwd()

        path = expand_path(raw)
        if not path.is_dir():
            msg = f"working directory does not exist: {path}"
            raise WorkingDirectoryMissingError(msg, path=str(path), project=ref.project)
        return path

    def _search_dirs(self) -> list[Path]:
        dirs = [self._settings.executables_dir]
        for raw in self._settings.executable_search_paths:
            path = expand_path(raw)
            if path.is_dir():
                dirs.append(path)
            else:
                logger.debug("Skipping missing search path %s", path)
        return dirs

    def _main_argv(
        self, definition: CommandDefinition, command: str, mode: ExecutionMode, cwd: Path
    ) -> tuple[list[str], Path | None]:
        if mode == ExecutionMode.ALIAS:
            return self._shell.argv(strip_alias(command), interactive=True), None
        if mode == ExecutionMode.SHELL:
            return self._shell.argv(command), None

        try:
            words = shlex.split(command)
        except ValueError as exc:
            msg = f"cannot parse command line for '{definition.name}': {exc}"
            raise ArgumentValidationError(msg, command=command) from exc

        if mode == ExecutionMode.LOCAL_SCRIPT:
            script = cwd / words[0]
            if not script.is_file():
                msg = f"script '{words[0]}' not found in {cwd}"
                raise ExecutableNotFoundError(msg, executable=words[0], cwd=str(cwd))
            if not is_user_executable(script):
                msg = f"'{script}' is not executable (try: chmod +x {script})"
                raise ExecutableNotPermittedError(msg, executable=words[0], path=str(script))
            return [str(script), *words[1:]], script

        executable = find_executable(words[0], self._search_dirs(), cwd=cwd)
        return [str(executable), *words[1:]], executable

    def _run_hook(
        self, phase: HookPhase, index: int, hook: str, prepared: _Prepared, *, capture: bool
    ) -> HookResult:
        env = prepared.env
        if is_self_invocation(hook) and self._settings.config_path is not None:
            env = {**env, CONFIG_ENV_VAR: str(self._settings.config_path)}
        logger.debug("Running %s-hook %d: %s", phase, index + 1, hook)
        spawned = self._invoker.spawn(
            hook_argv(hook, self._shell), cwd=prepared.cwd, env=env, capture=capture
        )
        return HookResult(
            phase=phase,
            index=index,
            command=hook,
            ok=spawned.ok,
            exit_code=spawned.exit_code,
            error=spawned.error,
            output=spawned.output if capture else None,
        )

    @staticmethod
    def _main_error(prepared: _Prepared, main: SpawnResult) -> ProcessExecutionError:
        name = prepared.ref.invoked_as
        if main.error:
            msg = f"command '{name}' failed: {main.error}"
        else:
            msg = f"command '{name}' exited with code {main.exit_code}"
        return ProcessExecutionError(
            msg,
            command=prepared.command,
            exit_code=main.exit_code,
            timed_out=main.timed_out,
        )

    @staticmethod
    def _finish(
        record: dict[str, Any],
        hooks: list[HookResult],
        warnings: list[str],
        *,
        error: InteropError | None = None,
    ) -> ServiceResult:
        data = {**record, "hooks": [asdict(h) for h in hooks]}
        if error is not None:
            return ServiceResult(
                ok=False,
                op="run",
                data=data,
                warnings=warnings,
                error=error.to_service_error(),
            )
        return ServiceResult(ok=True, op="run", data=data, warnings=warnings)
