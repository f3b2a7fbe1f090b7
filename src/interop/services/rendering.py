"""Command rendering: bound arguments + template -> final command string.

Rules, in definition order:

* prefixed arguments become ``<prefix> <value>`` tokens (bools emit the bare
  prefix only when true).  A prefix takes precedence over a ``${name}``
  placeholder, which is then left untouched.
* unprefixed arguments substitute their ``${name}`` placeholder; without a
  placeholder, a caller-supplied value is appended as a positional token.
  Default-only values never become positional tokens.

Undeclared pairs substitute their own placeholders.  All substitution is a
single flat pass over the template.  Final layout:

    template  positional  extras  prefixed  pass-through
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from typing import Any

from interop.domain.commands import ArgumentDefinition
from interop.domain.types import ArgumentType
from interop.services.binding import BoundArguments

PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")


def placeholder(name: str) -> str:
    return "${" + name + "}"


def format_value(value: Any) -> str:
    """String form of a bound value as it appears in a command line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def substitute(template: str, replacements: dict[str, str]) -> str:
    """Replace ``${name}`` occurrences in one pass; unknown names stay verbatim."""
    return PLACEHOLDER_RE.sub(lambda m: replacements.get(m.group(1), m.group(0)), template)


def render_command(
    template: str,
    definitions: Sequence[ArgumentDefinition],
    bound: BoundArguments,
    *,
    pass_through: bool = True,
) -> str:
    """Render *template* with *bound* arguments.

    Args:
        pass_through: Append undeclared ``name=value`` pairs that have no
            placeholder as literal tokens (CLI behaviour).  The MCP path
            drops them instead.
    """
    replacements: dict[str, str] = {}
    positional: list[str] = []
    prefixed: list[str] = []

    for definition in definitions:
        if definition.name not in bound.values:
            continue
        value = bound.values[definition.name]

        if definition.prefix:
            if definition.type == ArgumentType.BOOL:
                if value is True:
                    prefixed.append(definition.prefix)
            else:
                prefixed.append(f"{definition.prefix} {format_value(value)}")
            continue

        if placeholder(definition.name) in template:
            replacements[definition.name] = format_value(value)
        elif bound.supplied(definition.name):
            positional.append(format_value(value))

    trailing: list[str] = []
    for name, value in bound.undeclared.items():
        if placeholder(name) in template:
            replacements[name] = format_value(value)
        elif pass_through:
            trailing.append(f"{name}={format_value(value)}")

    rendered = substitute(template, replacements)
    parts = [rendered.strip(), *positional, *bound.extras, *prefixed, *trailing]
    return " ".join(part for part in parts if part)
