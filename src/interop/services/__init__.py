"""Service layer: resolution, binding, rendering, and invocation.

Services may import from domain and infrastructure layers.
They must never import from commands, output, or mcp.
"""
