"""MCP prompt definitions, generated from ``[prompts.<name>]`` tables.

A prompt's ``content`` may reference its arguments as ``{name}``; the
placeholders are filled from the call's arguments or the declared defaults.
``render_prompt_impl`` is testable without the mcp package.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from interop.config.models import DEFAULT_SERVER
from interop.services.rendering import format_value

if TYPE_CHECKING:
    from interop.config.models import PromptConfig
    from interop.config.settings import InteropSettings

logger = logging.getLogger(__name__)

_Prompt: Any = None
_PromptArgument: Any = None

try:
    from mcp.server.fastmcp.prompts.base import (  # type: ignore[import-not-found]
        Prompt as _Prompt,
        PromptArgument as _PromptArgument,
    )
except ImportError:
    pass

_PROMPT_PLACEHOLDER_RE = re.compile(r"\{([^{}\s]+)\}")


def render_prompt_impl(prompt: PromptConfig, arguments: dict[str, Any] | None = None) -> str:
    """Fill ``{name}`` placeholders in the prompt content.

    Placeholders that name no declared argument are left as written.

    Raises:
        ValueError: A required argument has neither a value nor a default.
    """
    given = {k: v for k, v in (arguments or {}).items() if v is not None}
    values: dict[str, str] = {}
    for definition in prompt.arguments:
        if definition.name in given:
            values[definition.name] = format_value(given[definition.name])
        elif definition.default is not None:
            values[definition.name] = format_value(definition.default)
        elif definition.required:
            msg = f"missing required argument '{definition.name}' for prompt '{prompt.name}'"
            raise ValueError(msg)
        else:
            values[definition.name] = ""

    def fill(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    return _PROMPT_PLACEHOLDER_RE.sub(fill, prompt.content)


def prompts_for(settings: InteropSettings, server: str = DEFAULT_SERVER) -> list[PromptConfig]:
    """Prompts assigned to *server*; unassigned prompts go to the default one."""
    return [
        prompt
        for _, prompt in sorted(settings.prompts.items())
        if (prompt.mcp or DEFAULT_SERVER) == server
    ]


def register_prompts(
    server: Any, settings: InteropSettings, server_name: str = DEFAULT_SERVER
) -> list[str]:
    """Register the server's prompts with FastMCP.  Returns their names."""
    if _Prompt is None:
        msg = "MCP extra not installed. Install with: pip install interop[mcp]"
        raise RuntimeError(msg)

    registered: list[str] = []
    for prompt in prompts_for(settings, server_name):

        def render(_prompt: PromptConfig = prompt, **kwargs: Any) -> str:
            return render_prompt_impl(_prompt, kwargs)

        server.add_prompt(
            _Prompt(
                name=prompt.name,
                description=prompt.description or None,
                arguments=[
                    _PromptArgument(
                        name=a.name,
                        description=a.description or None,
                        required=a.required and a.default is None,
                    )
                    for a in prompt.arguments
                ],
                fn=render,
            )
        )
        registered.append(prompt.name)

    logger.debug("Registered %d MCP prompts on %s", len(registered), server_name)
    return registered
