"""Click command classes shared by the ``zuora`` subcommands.

``ZuoraCommand`` takes an ``examples`` block. An eager ``--examples``
flag prints it and exits before arguments are checked, so
``zuora find --examples`` works without TYPE and ID.
"""

from __future__ import annotations

from typing import Any

import click

EXAMPLES_HEADER = "Examples for '{path}':\n"


class ZuoraCommand(click.Command):
    """A command with an optional ``--examples`` block."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(EXAMPLES_HEADER.format(path=ctx.command_path))
        click.echo(self.examples)
        ctx.exit(0)


class ZuoraGroup(click.Group):
    """Root group; ``@cli.command(examples=...)`` builds a ZuoraCommand."""

    command_class = ZuoraCommand
