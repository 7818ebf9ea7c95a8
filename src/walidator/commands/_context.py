"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy service construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from walidator.config.logging import configure_logging
from walidator.output.formatters import format_result

if TYPE_CHECKING:
    from walidator.config.settings import WalidatorSettings
    from walidator.services.result import ServiceResult
    from walidator.services.validation import ValidationService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The validation service (and plugin discovery behind it) is built on
    first use so ``--help`` and ``--version`` stay cheap.
    """

    def __init__(self, settings: WalidatorSettings) -> None:
        self.settings = settings
        self._service: ValidationService | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> ValidationService:
        """The validation service (created lazily on first access)."""
        if self._service is None:
            from walidator.plugins.manager import PluginManager
            from walidator.services.validation import ValidationService

            plugins = None
            if self.settings.plugins.enabled:
                plugins = PluginManager()
                plugins.discover_and_load()
            self._service = ValidationService.from_settings(self.settings, plugins)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
