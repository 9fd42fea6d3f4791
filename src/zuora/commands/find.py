"""Standalone command: load one object by id."""

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
  zuora find Product 4028e4883491c50901349d061be06550
  zuora --json find Account 2c92c0f93a569878013a6778f0446b11""",
)
@click.argument("type_name", metavar="TYPE")
@click.argument("remote_id", metavar="ID")
@click.pass_obj
def find(app: AppContext, type_name: str, remote_id: str) -> None:
    """Find one object of TYPE (e.g. Product, Account) by ID."""
    app.emit(QueryService(app.client).find(type_name, remote_id))
