"""Tests for MCP server creation."""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import pytest

from interop.mcp.server import mcp_available


class DummyFastMCP:
    def __init__(self, name: str, **kwargs: Any) -> None:
        self.name = name
        self.kwargs = kwargs
        self.tools: list[str] = []
        self.prompts: list[Any] = []

    def add_tool(self, fn: Any, name: str | None = None, description: str | None = None) -> None:
        self.tools.append(name or fn.__name__)

    def add_prompt(self, prompt: Any) -> None:
        self.prompts.append(prompt)


class TestServerAvailability:
    def test_mcp_available_is_bool(self) -> None:
        assert isinstance(mcp_available, bool)

    def test_create_server_without_mcp_raises(self, make_settings) -> None:
        from interop.mcp.server import create_server

        with (
            patch("interop.mcp.server.mcp_available", False),
            pytest.raises(RuntimeError, match="MCP extra not installed"),
        ):
            create_server(make_settings(""))


class TestCreateServer:
    def _create(self, settings: Any, **kwargs: Any) -> DummyFastMCP:
        from interop.mcp.server import create_server

        with (
            patch("interop.mcp.server.mcp_available", True),
            patch("interop.mcp.server._FastMCP", DummyFastMCP),
            patch("interop.mcp.prompts.register_prompts") as register_prompts,
        ):
            server = create_server(settings, **kwargs)
        register_prompts.assert_called_once()
        return server

    def test_default_server(self, make_settings) -> None:
        settings = make_settings('mcp_port = 8300\n[commands.hello]\ncmd = "echo hi"\n')
        server = self._create(settings)
        assert server.name == "interop"
        assert server.kwargs["port"] == 8300
        assert server.kwargs["host"] == "127.0.0.1"
        assert server.tools == ["list_commands", "hello"]

    def test_named_server_uses_its_port_and_description(self, make_settings) -> None:
        settings = make_settings(
            '[mcp_servers.ops]\ndescription = "Ops tools"\nport = 9001\n'
            '[commands.deploy]\ncmd = "deploy"\nmcp = "ops"\n'
            '[commands.hello]\ncmd = "echo hi"\n'
        )
        server = self._create(settings, server_name="ops")
        assert server.name == "interop-ops"
        assert server.kwargs["port"] == 9001
        assert server.kwargs["instructions"] == "Ops tools"
        assert server.tools == ["list_commands", "deploy"]

    def test_explicit_port_wins(self, make_settings) -> None:
        server = self._create(make_settings(""), port=9999, host="0.0.0.0")
        assert server.kwargs["port"] == 9999
        assert server.kwargs["host"] == "0.0.0.0"
