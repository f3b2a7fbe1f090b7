"""Invoker: the process-spawning boundary.

The orchestrator only ever talks to an :class:`Invoker`.  Production code
uses :class:`SubprocessInvoker`; tests substitute a recording fake.  The
working directory is handed to the child process, never applied to the
current interpreter, so concurrent invocations cannot interfere.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpawnResult:
    """Outcome of one spawned process.

    ``error`` is set when the process could not be started or timed out;
    ``output`` holds combined stdout/stderr when capture was requested.
    """

    exit_code: int
    output: str = ""
    error: str | None = None
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and self.error is None


class Invoker(Protocol):
    def spawn(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str],
        timeout: float | None = None,
        capture: bool = False,
    ) -> SpawnResult: ...


def _decode(raw: bytes | str | None) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


class SubprocessInvoker:
    """Spawn processes with :func:`subprocess.run`.

    Without capture the child inherits stdin/stdout/stderr.  With capture,
    stderr is folded into stdout and returned as text; bytes that are not
    valid UTF-8 become replacement characters.
    """

    def spawn(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str],
        timeout: float | None = None,
        capture: bool = False,
    ) -> SpawnResult:
        logger.debug("Spawning %s in %s", list(argv), cwd)
        try:
            completed = subprocess.run(
                list(argv),
                cwd=cwd,
                env=dict(env),
                timeout=timeout,
                stdout=subprocess.PIPE if capture else None,
                stderr=subprocess.STDOUT if capture else None,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            return SpawnResult(
                exit_code=-1,
                output=_decode(exc.output),
                error=f"timed out after {timeout}s",
                timed_out=True,
            )
        except OSError as exc:
            logger.debug("Spawn failed: %s", exc)
            return SpawnResult(exit_code=127, error=str(exc))
        return SpawnResult(exit_code=completed.returncode, output=completed.stdout or "")
