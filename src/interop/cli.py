"""Root CLI group for interop with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from interop import __version__
from interop.commands import register_commands
from interop.commands._base import InteropGroup
from interop.commands._context import AppContext
from interop.config.settings import InteropSettings


@click.group(
    cls=InteropGroup,
    invoke_without_command=True,
    examples="""\
  interop command list
  interop run build
  interop -c ./settings.toml validate
  interop --json project list""",
)
@click.version_option(version=__version__, prog_name="interop")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """interop: run project-aware commands from the shell or over MCP."""
    ctx.ensure_object(dict)
    try:
        settings = InteropSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc}"
        raise click.ClickException(msg) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
