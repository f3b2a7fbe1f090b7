"""MCP tool definitions, generated from the configured commands.

Every enabled command assigned to a server becomes a tool named after the
command, and every alias bound to such a command becomes a tool named after
the alias.  A fixed ``list_commands`` tool describes what is available.

Each tool has an ``_impl`` function testable without the mcp package.
``register_tools()`` builds a handler per tool whose signature mirrors the
command's argument definitions, so clients see one parameter per argument.
"""

from __future__ import annotations

import inspect
import keyword
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any

from pydantic import Field

from interop.config.models import DEFAULT_SERVER
from interop.domain.errors import InteropError
from interop.domain.types import ArgumentType
from interop.services.resolver import resolve_command
from interop.services.result import ServiceResult

if TYPE_CHECKING:
    from interop.config.settings import InteropSettings
    from interop.domain.commands import ArgumentDefinition, CommandDefinition
    from interop.infrastructure.invoker import Invoker

logger = logging.getLogger(__name__)

LIST_COMMANDS_TOOL = "list_commands"
PROJECT_PATH_PARAM = "project_path"
LEGACY_ARGS_PARAM = "args"

_ANSI_RE = re.compile(r"\x1b(?:\[[0-?]*[ -/]*[@-~]|\][^\x07\x1b]*(?:\x07|\x1b\\)|[@-Z\\-_])")


def sanitize_output(text: str) -> str:
    """Strip ANSI escape sequences from captured process output."""
    return _ANSI_RE.sub("", text)


def _to_mcp_response(result: ServiceResult) -> dict[str, Any]:
    """Convert a ServiceResult to an MCP-friendly dict."""
    data = dict(result.data)
    if isinstance(data.get("output"), str):
        data["output"] = sanitize_output(data["output"])
    response: dict[str, Any] = {
        "ok": result.ok,
        "op": result.op,
        "data": data,
    }
    if result.warnings:
        response["warnings"] = result.warnings
    if result.error is not None:
        response["error"] = {
            "code": result.error.code,
            "message": result.error.message,
        }
    return response


def _to_text(response: dict[str, Any]) -> str:
    """Plain-text rendering of a response for servers without JSON output."""
    data = response.get("data", {})
    output = str(data.get("output") or "").rstrip("\n")
    lines: list[str] = []
    if not response.get("ok"):
        lines.append(f"Error: {response.get('error', {}).get('message', 'unknown error')}")
    if output:
        lines.append(output)
    elif response.get("ok"):
        lines.append(f"Command '{data.get('invoked_as', '')}' completed successfully")
    lines.extend(f"Warning: {w}" for w in response.get("warnings", []))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Tool discovery
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ToolSpec:
    """One tool to expose: a command name or alias on a given server."""

    name: str
    command: CommandDefinition
    project: str | None
    is_global: bool
    is_alias: bool

    @property
    def description(self) -> str:
        text = self.command.description or f"Run '{self.command.name}'"
        if self.is_alias:
            text += f" (alias of '{self.command.name}' in project '{self.project}')"
        elif self.project:
            text += f" (runs in project '{self.project}')"
        return text


def _serves(command: CommandDefinition, server: str) -> bool:
    if command.mcp:
        return command.mcp == server
    return server == DEFAULT_SERVER


def tool_specs(settings: InteropSettings, server: str = DEFAULT_SERVER) -> list[ToolSpec]:
    """Tools for *server*: its enabled commands, then their aliases."""
    names = [
        name
        for name, cmd in sorted(settings.commands.items())
        if cmd.is_enabled and _serves(cmd, server)
    ]
    served = set(names)
    for _, project in sorted(settings.projects.items()):
        names.extend(
            b.alias for b in project.commands if b.alias and b.command_name in served
        )

    specs: list[ToolSpec] = []
    seen: set[str] = set()
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        try:
            ref = resolve_command(settings, name)
        except InteropError as exc:
            logger.warning("Skipping MCP tool %s: %s", name, exc.message)
            continue
        specs.append(
            ToolSpec(
                name=name,
                command=ref.definition,
                project=ref.project,
                is_global=ref.is_global,
                is_alias=name != ref.command_name,
            )
        )
    return specs


# ---------------------------------------------------------------------------
# Tool implementations (testable without mcp)
# ---------------------------------------------------------------------------


def run_command_impl(
    settings: InteropSettings,
    name: str,
    arguments: dict[str, Any] | None = None,
    *,
    project_path: str | None = None,
    invoker: Invoker | None = None,
) -> dict[str, Any]:
    """Run command or alias *name* with captured output."""
    from interop.services.invocation import InvocationService

    svc = InvocationService(settings, invoker=invoker)
    result = svc.run_mapping(name, arguments, project_path=project_path, capture=True)
    return _to_mcp_response(result)


def _describe_argument(definition: ArgumentDefinition) -> dict[str, Any]:
    return {
        "name": definition.name,
        "type": str(definition.type),
        "required": definition.required,
        "description": definition.description,
        "default": definition.default,
    }


def list_commands_impl(
    settings: InteropSettings, server: str = DEFAULT_SERVER
) -> dict[str, Any]:
    """Describe the commands and aliases exposed on *server*."""
    items = [
        {
            "name": spec.name,
            "command": spec.command.name,
            "project": spec.project,
            "alias": spec.is_alias,
            "description": spec.command.description,
            "arguments": [_describe_argument(a) for a in spec.command.arguments],
        }
        for spec in tool_specs(settings, server)
    ]
    result = ServiceResult(
        ok=True,
        op="list_commands",
        data={"server": server, "items": items, "count": len(items)},
    )
    return _to_mcp_response(result)


# ---------------------------------------------------------------------------
# Handler construction
# ---------------------------------------------------------------------------


def _valid_param(name: str) -> bool:
    return (
        name.isidentifier()
        and not keyword.iskeyword(name)
        and not name.startswith("_")
        and name not in (PROJECT_PATH_PARAM, LEGACY_ARGS_PARAM)
    )


def _param_description(definition: ArgumentDefinition) -> str:
    text = definition.description or definition.name
    if definition.type != ArgumentType.STRING:
        text += f" (type: {definition.type})"
    if definition.required:
        text += " (required)"
    return text


def _parameters(spec: ToolSpec) -> list[inspect.Parameter]:
    params: list[inspect.Parameter] = []
    for definition in spec.command.arguments:
        if not _valid_param(definition.name):
            logger.warning(
                "Tool %s: argument '%s' is not a valid parameter name; skipped",
                spec.name,
                definition.name,
            )
            continue
        params.append(
            inspect.Parameter(
                definition.name,
                inspect.Parameter.KEYWORD_ONLY,
                default=None,
                annotation=Annotated[
                    str | None, Field(description=_param_description(definition))
                ],
            )
        )
    if spec.is_global:
        params.append(
            inspect.Parameter(
                PROJECT_PATH_PARAM,
                inspect.Parameter.KEYWORD_ONLY,
                default=None,
                annotation=Annotated[
                    str | None, Field(description="Directory to run the command in")
                ],
            )
        )
    if not spec.command.arguments:
        params.append(
            inspect.Parameter(
                LEGACY_ARGS_PARAM,
                inspect.Parameter.KEYWORD_ONLY,
                default=None,
                annotation=Annotated[
                    dict[str, Any] | None,
                    Field(description="Values for ${name} placeholders in the command"),
                ],
            )
        )
    return params


def make_tool_handler(
    settings: InteropSettings,
    spec: ToolSpec,
    *,
    json_output: bool = False,
    invoker: Invoker | None = None,
) -> Any:
    """Build the callable FastMCP registers for *spec*."""

    def handler(**kwargs: Any) -> Any:
        project_path = kwargs.pop(PROJECT_PATH_PARAM, None)
        legacy = kwargs.pop(LEGACY_ARGS_PARAM, None) or {}
        arguments = {**legacy, **kwargs}
        response = run_command_impl(
            settings, spec.name, arguments, project_path=project_path, invoker=invoker
        )
        return response if json_output else _to_text(response)

    handler.__name__ = spec.name if spec.name.isidentifier() else "run_command"
    handler.__doc__ = spec.description
    handler.__signature__ = inspect.Signature(  # type: ignore[attr-defined]
        _parameters(spec),
        return_annotation=dict[str, Any] if json_output else str,
    )
    return handler


def register_tools(
    server: Any, settings: InteropSettings, server_name: str = DEFAULT_SERVER
) -> list[str]:
    """Register the ``list_commands`` tool and one tool per command or alias.

    Returns the registered tool names.
    """
    json_output = settings.server_output_json(server_name)

    def list_commands() -> dict[str, Any]:
        """List the commands and aliases this server exposes, with their arguments."""
        return list_commands_impl(settings, server_name)

    server.add_tool(list_commands, name=LIST_COMMANDS_TOOL, description=list_commands.__doc__)
    registered = [LIST_COMMANDS_TOOL]

    for spec in tool_specs(settings, server_name):
        if spec.name == LIST_COMMANDS_TOOL:
            logger.warning("Command '%s' shadows a built-in tool; skipped", spec.name)
            continue
        handler = make_tool_handler(settings, spec, json_output=json_output)
        server.add_tool(handler, name=spec.name, description=spec.description)
        registered.append(spec.name)

    logger.debug("Registered %d MCP tools on %s", len(registered), server_name)
    return registered
