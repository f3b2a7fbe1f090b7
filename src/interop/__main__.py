"""Allow ``python -m interop`` (used for self-invoking hooks)."""

from interop.cli import cli

if __name__ == "__main__":
    cli()
