"""FastMCP server setup.

Optional extra, guarded behind try/except ImportError.
Transport: stdio default, SSE and streamable HTTP optional.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from interop.config.models import DEFAULT_SERVER

if TYPE_CHECKING:
    from interop.config.settings import InteropSettings

mcp_available = False
_FastMCP: Any = None

try:
    from mcp.server.fastmcp import FastMCP as _FastMCP  # type: ignore[no-redef,import-not-found]

    mcp_available = True
except ImportError:
    pass

__all__ = ["create_server", "mcp_available"]


def create_server(
    settings: InteropSettings | None = None,
    *,
    server_name: str = DEFAULT_SERVER,
    host: str = "127.0.0.1",
    port: int | None = None,
) -> Any:
    """Create and configure the MCP server named *server_name*.

    Registers a tool per command (and alias) assigned to the server plus
    the server's prompts.  *settings* defaults to a freshly discovered
    snapshot; *port* defaults to the server's configured port.

    Raises RuntimeError if the mcp extra is not installed.
    """
    if not mcp_available or _FastMCP is None:
        msg = "MCP extra not installed. Install with: pip install interop[mcp]"
        raise RuntimeError(msg)

    from interop.mcp.prompts import register_prompts
    from interop.mcp.tools import register_tools

    if settings is None:
        from interop.config.settings import InteropSettings

        settings = InteropSettings.from_cli()

    cfg = settings.mcp_servers.get(server_name)
    instructions = cfg.description if cfg and cfg.description else None
    listen = port if port is not None else settings.server_port(server_name)

    server = _FastMCP(
        "interop" if server_name == DEFAULT_SERVER else f"interop-{server_name}",
        instructions=instructions,
        host=host,
        port=listen,
    )

    register_tools(server, settings, server_name)
    register_prompts(server, settings, server_name)

    return server
