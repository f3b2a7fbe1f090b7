"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  Owns the settings snapshot and centralizes result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from interop.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from interop.config.settings import InteropSettings
    from interop.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: InteropSettings) -> None:
        self.settings = settings

        from interop.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            level=settings.log_level,
        )

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult, *, quiet_success: bool = False) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout and returns.  Warnings go to stderr so
          they don't pollute piped output.  With *quiet_success* the body
          is suppressed unless ``--json`` or ``--verbose`` was given.
        * Failure: writes the error and any warnings to stderr, exits with
          code 1.
        """
        settings = self.output_settings
        if result.ok:
            if not quiet_success or settings.json_output or settings.verbose:
                click.echo(format_result(result, settings=settings))
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(format_result(result, settings=settings), err=True)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            raise SystemExit(1)
