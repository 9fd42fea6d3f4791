"""Standalone command: authenticate and report the session."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from zuora.commands._base import ZuoraCommand
from zuora.services.query import QueryService

if TYPE_CHECKING:
    from zuora.commands._context import AppContext


@click.command(
    cls=ZuoraCommand,
    examples="""\
  ZUORA_USERNAME=api@example.com ZUORA_PASSWORD=secret zuora login
  zuora --sandbox login
  zuora --json login""",
)
@click.pass_obj
def login(app: AppContext) -> None:
    """Log in with the configured credentials (session key is masked)."""
    app.emit(QueryService(app.client).login())
