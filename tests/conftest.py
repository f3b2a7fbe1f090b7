"""Shared pytest fixtures and test helpers for interop tests."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from interop.config.settings import InteropSettings
from interop.infrastructure.invoker import SpawnResult
from interop.infrastructure.shell import ShellInfo
from interop.services.invocation import InvocationService


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect ``$HOME`` to a temp directory and clear interop env vars.

    The default settings file and executables directory resolve under it.
    """
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.delenv("INTEROP_CONFIG", raising=False)
    monkeypatch.delenv("INTEROP_LOG_LEVEL", raising=False)
    return home_dir


@pytest.fixture
def config_file(home: Path) -> Callable[[str], Path]:
    """Write TOML text to the default settings location and return its path."""

    def write(text: str) -> Path:
        path = home / ".config" / "interop" / "settings.toml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return write


@pytest.fixture
def make_settings(config_file: Callable[[str], Path]) -> Callable[..., InteropSettings]:
    """Build an InteropSettings snapshot from TOML text."""

    def build(text: str = "", **flags: Any) -> InteropSettings:
        path = config_file(text)
        return InteropSettings.from_cli(config_path=str(path), **flags)

    return build


@pytest.fixture
def project_dir(home: Path) -> Path:
    """An existing project directory inside the fake home."""
    path = home / "code" / "api"
    path.mkdir(parents=True)
    return path


# ---------------------------------------------------------------------------
# Fake invoker
# ---------------------------------------------------------------------------


@dataclass
class SpawnCall:
    argv: list[str]
    cwd: Path
    env: dict[str, str]
    timeout: float | None
    capture: bool

    @property
    def command(self) -> str:
        """The last argv element: the shell command for shell-run spawns."""
        return self.argv[-1]


@dataclass
class FakeInvoker:
    """Records spawns instead of running them.

    ``exit_codes`` maps a substring of the joined argv to the exit code a
    matching spawn returns; everything else exits 0.
    """

    exit_codes: dict[str, int] = field(default_factory=dict)
    calls: list[SpawnCall] = field(default_factory=list)

    def spawn(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str],
        timeout: float | None = None,
        capture: bool = False,
    ) -> SpawnResult:
        self.calls.append(SpawnCall(list(argv), cwd, dict(env), timeout, capture))
        joined = " ".join(argv)
        code = next((c for key, c in self.exit_codes.items() if key in joined), 0)
        return SpawnResult(exit_code=code, output=f"ran: {argv[-1]}\n" if capture else "")

    @property
    def commands(self) -> list[str]:
        return [c.command for c in self.calls]


@pytest.fixture
def invoker() -> FakeInvoker:
    return FakeInvoker()


SH = ShellInfo(path="/bin/sh", name="sh")


@pytest.fixture
def service_for(invoker: FakeInvoker) -> Callable[[InteropSettings], InvocationService]:
    """InvocationService wired to the fake invoker, /bin/sh, and an empty env."""

    def build(settings: InteropSettings, **env: str) -> InvocationService:
        return InvocationService(settings, invoker=invoker, shell=SH, inherited_env=env)

    return build
