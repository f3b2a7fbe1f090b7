"""interop: run named commands across projects from a CLI or MCP clients."""

__version__ = "0.1.0"
