"""Smoke tests for the CLI entrypoint."""

from click.testing import CliRunner

from uuidify.cli import cli


def test_cli_help_displays_commands() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "uuidify renames files" in result.output
    assert "rename" in result.output
    assert "config" in result.output
