"""Infrastructure layer: filesystem paths, shell detection, process spawning.

This layer depends on the stdlib and domain error types only.
It must never import from services, commands, or output.
"""
