"""Environment merging across four tiers.

Precedence, highest first: command env > project env > global env >
inherited process environment.  A higher tier replaces a lower tier's value
for the same key; every key from every tier survives.
"""

from __future__ import annotations

import os
from collections.abc import Mapping


def merge_environment(
    command_env: Mapping[str, str] | None = None,
    project_env: Mapping[str, str] | None = None,
    global_env: Mapping[str, str] | None = None,
    inherited: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Merge the four tiers into one environment mapping.

    *inherited* defaults to ``os.environ``.
    """
    merged = dict(os.environ if inherited is None else inherited)
    for layer in (global_env, project_env, command_env):
        if layer:
            merged.update(layer)
    return merged


def to_env_list(env: Mapping[str, str]) -> list[str]:
    """Render an environment as sorted ``KEY=VALUE`` strings."""
    return [f"{key}={value}" for key, value in sorted(env.items())]
