"""MCP adapter: exposes configured commands and prompts as MCP tools."""
