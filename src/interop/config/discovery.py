"""Settings file discovery and bootstrap.

The settings file lives at ``~/.config/interop/settings.toml`` unless the
``INTEROP_CONFIG`` env var or the ``--config`` CLI flag points elsewhere.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "settings.toml"
CONFIG_ENV_VAR = "INTEROP_CONFIG"
EXECUTABLES_DIRNAME = "executables"

DEFAULT_SETTINGS = """\
# interop settings
# Commands, projects, and MCP servers are defined here.

log_level = "warning"           # error, warning, info, verbose
executable_search_paths = []    # extra directories searched for executables
mcp_port = 8081                 # port for the default MCP server

# env = { NODE_ENV = "development" }

# [projects.sample]
# path = "~/projects/sample"
# description = "Sample project"
# commands = [
#   { command_name = "build", alias = "b" },
#   { command_name = "test" },
# ]

# [commands.build]
# cmd = "make build"
# description = "Build the project"
# arguments = [
#   { name = "target", type = "string", description = "Make target", default = "all" },
# ]

# [commands.hello]
# cmd = "echo hello"
"""


def config_dir() -> Path:
    """Directory holding the settings file and the executables folder."""
    return Path.home() / ".config" / "interop"


def default_config_path() -> Path:
    return config_dir() / CONFIG_FILENAME


def executables_dir() -> Path:
    """Directory searched first for ``is_executable`` commands."""
    return config_dir() / EXECUTABLES_DIRNAME


def configured_path() -> Path:
    """Where the settings file should live, whether or not it exists yet."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return default_config_path()


def find_config() -> Path | None:
    """Locate the settings file.

    Checks ``INTEROP_CONFIG`` first, then the default location.
    Returns None if no file exists.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_file():
            return p
        return None

    default = default_config_path()
    if default.is_file():
        return default
    return None


def ensure_config(path: Path | None = None) -> Path:
    """Create the config directories and a default settings file if missing.

    Returns the settings file path.
    """
    target = path or default_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    executables_dir().mkdir(parents=True, exist_ok=True)
    if not target.exists():
        target.write_text(DEFAULT_SETTINGS, encoding="utf-8")
    return target
