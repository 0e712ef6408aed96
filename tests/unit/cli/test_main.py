"""Unit tests for CLI main entry point."""

import pytest
from click.testing import CliRunner

from expense_tracker import __version__
from expense_tracker.cli import cli


class TestCLIMain:
    """Test suite for CLI main entry point."""

    @pytest.fixture
    def runner(self):
        """Create a Click CLI test runner."""
        return CliRunner()

    def test_cli_help_text(self, runner):
        """Test that CLI help text is informative."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Expense Tracker CLI" in result.output
        assert "Commands:" in result.output

    def test_cli_version_flag(self, runner):
        """Test that --version flag works."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    @pytest.mark.parametrize(
        "command", ["serve", "init-db", "export", "estimate-pdf", "report"]
    )
    def test_commands_registered(self, runner, command):
        """Test that every command is listed in the help."""
        result = runner.invoke(cli, ["--help"])
        assert command in result.output

    def test_unknown_command_shows_error(self, runner):
        """Test that unknown commands show helpful error."""
        result = runner.invoke(cli, ["unknown-command"])
        assert result.exit_code != 0
        assert "No such command" in result.output
