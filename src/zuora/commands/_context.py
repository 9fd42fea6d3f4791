"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Provides a lazily constructed client and
centralized result emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from zuora.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from zuora.client import ZuoraClient
    from zuora.config.settings import ZuoraSettings
    from zuora.services.result import OperationResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The client is created on first use so ``--help`` and ``--version``
    never open an HTTP connection pool.
    """

    def __init__(self, settings: ZuoraSettings) -> None:
        self.settings = settings
        self._client: ZuoraClient | None = None

        from zuora.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from zuora.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def client(self) -> ZuoraClient:
        """The client instance (created lazily on first access)."""
        if self._client is None:
            from zuora.client import ZuoraClient

            self._client = ZuoraClient(self.settings)
            click.get_current_context().call_on_close(self._client.close)
        return self._client

    def emit(self, result: OperationResult) -> None:
        """Format and output an OperationResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
