"""Tests for the command-line entry point."""

from unittest.mock import patch

from click.testing import CliRunner

from courseware import __version__
from courseware.cli import cli


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_serve_uses_app_factory():
    with patch("courseware.cli.uvicorn.run") as mock_run:
        result = CliRunner().invoke(cli, ["serve", "--port", "9001"])

    assert result.exit_code == 0
    args, kwargs = mock_run.call_args
    assert args == ("courseware.api.app:create_app",)
    assert kwargs["factory"] is True
    assert kwargs["port"] == 9001


def test_db_init_reports_failure():
    with patch(
        "courseware.database.connection.create_tables", side_effect=RuntimeError("no database")
    ):
        result = CliRunner().invoke(cli, ["db", "init"])

    assert result.exit_code == 1
    assert "no database" in result.output
