"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``INTEROP_*`` prefix
  3. TOML file: ``settings.toml`` (see :mod:`interop.config.discovery`)
  4. Code defaults: baked into the models

The resulting :class:`InteropSettings` is an immutable snapshot.  It is
built once per process (by the CLI root group or the MCP server factory)
and passed explicitly to every service; nothing reads a global.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from interop.config.discovery import executables_dir, find_config
from interop.config.models import DEFAULT_SERVER, LogLevel, McpServerConfig, PromptConfig
from interop.domain.commands import CommandDefinition, Project


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the discovered ``settings.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class InteropSettings(BaseSettings):
    """Complete configuration snapshot for one interop process.

    Attributes:
        config_path: The settings file in use (explicit ``--config`` or
            discovered), or None when running on defaults only.
        commands: Command definitions keyed by name.  Each definition's
            ``name`` is forced to match its key.
        projects: Projects keyed by name.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "INTEROP_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Global TOML keys ---
    log_level: LogLevel = LogLevel.WARNING
    executable_search_paths: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    mcp_port: int = 8081
    is_tool_output_json: bool = False
    command_timeout: float | None = None

    # --- TOML tables ---
    commands: dict[str, CommandDefinition] = Field(default_factory=dict)
    projects: dict[str, Project] = Field(default_factory=dict)
    mcp_servers: dict[str, McpServerConfig] = Field(default_factory=dict)
    prompts: dict[str, PromptConfig] = Field(default_factory=dict)

    # Retained for type-checker visibility; not used at runtime.
    _toml_path: ClassVar[Path | None] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _lowercase_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("commands", "projects", "mcp_servers", "prompts")
    @classmethod
    def _name_from_key(cls, value: dict[str, Any]) -> dict[str, Any]:
        return {
            key: item if item.name == key else item.model_copy(update={"name": key})
            for key, item in value.items()
        }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(cls, *, config_path: str | None = None, **cli_flags: Any) -> InteropSettings:
        """Construct settings from a CLI invocation.

        Uses the explicit *config_path* when given (a missing file means
        "no overrides"), otherwise discovers the settings file.  CLI flags
        are merged as highest-priority overrides.
        """
        toml_path = Path(config_path).expanduser() if config_path else find_config()

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    # --- Derived views ---

    @property
    def executables_dir(self) -> Path:
        return executables_dir()

    def server_port(self, server: str = DEFAULT_SERVER) -> int:
        """Port for *server*, falling back to the global ``mcp_port``."""
        cfg = self.mcp_servers.get(server)
        if cfg is not None and cfg.port is not None:
            return cfg.port
        return self.mcp_port

    def server_output_json(self, server: str = DEFAULT_SERVER) -> bool:
        cfg = self.mcp_servers.get(server)
        if cfg is not None and cfg.is_tool_output_json is not None:
            return cfg.is_tool_output_json
        return self.is_tool_output_json
