"""Standalone command: run a raw ZOQL query."""

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
  zuora query "select Id, Name from Product"
  zuora query "select Id from Account where Status = 'Active'" --all
  zuora --json query 'select Id, Name from ProductRatePlan'""",
)
@click.argument("zoql")
@click.option("--all", "follow", is_flag=True, help="Follow queryMore until every page is read.")
@click.pass_obj
def query(app: AppContext, zoql: str, follow: bool) -> None:
    """Run a ZOQL statement and print the returned records."""
    app.emit(QueryService(app.client).query(zoql, follow=follow))
