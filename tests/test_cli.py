"""Tests for the root t2tctl CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from t2tctl import __version__
from t2tctl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "t2tctl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_cwd")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/test.toml", "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_cwd")
def test_invalid_config_reported(cli_runner: CliRunner, tmp_path: Path) -> None:
    bad = tmp_path / "bad.toml"
    bad.write_text("[tokens\n")
    result = cli_runner.invoke(cli, ["-c", str(bad), "date", "tom"])
    assert result.exit_code != 0
    assert "Invalid TOML" in result.output


# --- Commands registered ---

EXPECTED_COMMANDS = ["tokens", "date", "pseudo-date", "normalize", "sync"]


@pytest.mark.parametrize("command", EXPECTED_COMMANDS)
def test_command_registered(cli_runner: CliRunner, command: str) -> None:
    result = cli_runner.invoke(cli, [command, "--help"])
    assert result.exit_code == 0, f"{command} --help failed: {result.output}"


def test_all_commands_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    for name in EXPECTED_COMMANDS:
        assert name in result.output, f"{name} missing from --help"


# --- Clock pinning ---


@pytest.mark.usefixtures("_isolated_cwd")
def test_today_option_pins_clock(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-q", "--today", "2026-03-10", "pseudo-date"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "2026-06-01"


@pytest.mark.usefixtures("_isolated_cwd")
def test_env_clock_used_without_option(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-q", "pseudo-date"])
    assert result.stdout.strip() == "2027-01-01"


def test_today_option_rejects_bad_date(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--today", "21/10/2026", "pseudo-date"])
    assert result.exit_code == 2
    assert "--today" in result.output
