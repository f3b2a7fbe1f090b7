"""serve: start an MCP server (requires interop[mcp] extra)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from interop.commands._base import InteropCommand
from interop.config.models import DEFAULT_SERVER

if TYPE_CHECKING:
    from interop.commands._context import AppContext


@click.command(
    cls=InteropCommand,
    examples="""\
  # Serve commands of the default server over stdio
  interop serve

  # A named server from [mcp_servers.<name>]
  interop serve --server ops

  # Streamable HTTP on the configured port (mcp_port or the server's port)
  interop serve --transport streamable-http

  # SSE on a custom address
  interop serve --transport sse --host 0.0.0.0 --port 9000""",
)
@click.option(
    "--server",
    "server_name",
    default=DEFAULT_SERVER,
    show_default=True,
    help="Which MCP server's commands and prompts to expose.",
)
@click.option(
    "--transport",
    default="stdio",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol.",
)
@click.option("--host", default="127.0.0.1", help="Bind address (HTTP transports only).")
@click.option(
    "--port",
    default=None,
    type=int,
    help="Listen port (HTTP transports only).  Defaults to the configured port.",
)
@click.pass_obj
def serve(
    app: AppContext, server_name: str, transport: str, host: str, port: int | None
) -> None:
    """Start an MCP server exposing configured commands as tools."""
    from interop.mcp.server import create_server, mcp_available

    if not mcp_available:
        click.echo("MCP not installed. Install with: pip install interop[mcp]", err=True)
        raise SystemExit(1)

    if server_name != DEFAULT_SERVER and server_name not in app.settings.mcp_servers:
        click.echo(f"WARNING: MCP server '{server_name}' is not configured", err=True)

    server = create_server(app.settings, server_name=server_name, host=host, port=port)
    server.run(transport=transport)
