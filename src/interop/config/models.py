"""Pydantic models for the non-command sections of ``settings.toml``.

Sparse TOML contract: defaults baked here, the settings file only contains
overrides.  Command and project tables live in :mod:`interop.domain.commands`
since the engine consumes them directly.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from interop.domain.commands import ArgumentDefinition

DEFAULT_SERVER = "default"


class LogLevel(StrEnum):
    """Top-level ``log_level`` values accepted in ``settings.toml``."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    VERBOSE = "verbose"
    DEBUG = "debug"


class McpServerConfig(BaseModel):
    """[mcp_servers.<name>] section."""

    model_config = {"frozen": True}

    name: str = ""
    description: str = ""
    port: int | None = None
    is_tool_output_json: bool | None = None


class PromptConfig(BaseModel):
    """[prompts.<name>] section.

    ``content`` may contain ``{argument}`` placeholders filled from the
    prompt call's arguments (or their defaults).
    """

    model_config = {"frozen": True}

    name: str = ""
    description: str = ""
    content: str = ""
    mcp: str | None = None
    arguments: list[ArgumentDefinition] = Field(default_factory=list)
