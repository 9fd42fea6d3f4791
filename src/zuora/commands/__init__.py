"""Subcommand modules for the ``zuora`` CLI.

Provides register_commands() which uses deferred imports to keep
``zuora --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from zuora.commands.find import find
    from zuora.commands.login import login
    from zuora.commands.query import query

    cli.add_command(login)
    cli.add_command(query)
    cli.add_command(find)
