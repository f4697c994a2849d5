"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from t2tctl.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--examples"], ["t2tctl tokens", "t2tctl date"]),
    (["tokens", "--examples"], ["//tomorrow /top /errand"]),
    (["date", "--examples"], ["next fri"]),
    (["pseudo-date", "--examples"], ["--status waiting"]),
    (["normalize", "--examples"], ["wf Bob"]),
    (["sync", "--examples"], ["--dry-run"]),
]


@pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
def test_examples(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_examples_skip_command_body(cli_runner: CliRunner) -> None:
    """--examples is eager: required arguments are not demanded."""
    result = cli_runner.invoke(cli, ["sync", "--examples"])
    assert result.exit_code == 0
    assert "Missing argument" not in result.output
