"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from zuora.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["login", "--examples"], ["zuora --sandbox login", "ZUORA_USERNAME"]),
    (["query", "--examples"], ["--all", "select Id, Name from Product"]),
    (["find", "--examples"], ["zuora find Product"]),
]


@pytest.mark.parametrize(
    ("args", "keywords"),
    EXAMPLES_COMMANDS,
    ids=[args[0] for args, _ in EXAMPLES_COMMANDS],
)
def test_examples_flag(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert result.output.startswith(f"Examples for 'cli {args[0]}':")
    for keyword in keywords:
        assert keyword in result.output


def test_examples_listed_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["find", "--help"])
    assert "--examples" in result.output


def test_examples_skip_required_arguments(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["find", "--examples"])
    assert result.exit_code == 0
    assert "Missing argument" not in result.output
