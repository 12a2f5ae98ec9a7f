"""
Unit tests for the command line interface

Tests:
- types / request / response / fields / write commands
- Import errors reported as bad parameters
"""

import click
import pytest
from click.testing import CliRunner

from schemadoc.cli.main import cli
from schemadoc.cli.console import load_object

from sample_app import UserView


@pytest.fixture
def runner():
    return CliRunner()


class TestCommands:
    """Test CLI commands against the sample application"""

    def test_version(self, runner):
        """Test --version"""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_types(self, runner):
        """Test the catalogue of a view"""
        result = runner.invoke(cli, ["types", "sample_app:UserView"])

        assert result.exit_code == 0
        assert "### <a id=User></a>User" in result.output
        assert "### <a id=Organization></a>Organization" in result.output

    def test_request(self, runner):
        """Test the request body table of an action"""
        result = runner.invoke(cli, ["request", "sample_app:UserController", "--action", "create"])

        assert result.exit_code == 0
        assert "Fields marked in **bold** are required." in result.output
        assert "<tr><td>**email**</td><td>string</td></tr>" in result.output

    def test_request_without_body(self, runner):
        """Test actions without a request body"""
        result = runner.invoke(cli, ["request", "sample_app:UserController", "-a", "index"])

        assert result.exit_code == 0
        assert "No request body declared" in result.output

    def test_response(self, runner):
        """Test the response table with exclusions"""
        result = runner.invoke(cli, ["response", "sample_app:UserView", "-x", "status"])

        assert result.exit_code == 0
        assert "<tr><td>email</td><td>string</td></tr>" in result.output
        assert "<td>status</td>" not in result.output

    def test_response_without_schema(self, runner):
        """Test views with no schema"""
        result = runner.invoke(cli, ["response", "sample_app:HealthView"])

        assert result.exit_code == 0
        assert "No schema found" in result.output

    def test_fields(self, runner):
        """Test request field names of the update action"""
        result = runner.invoke(cli, ["fields", "sample_app:UserView", "--action", "update"])

        assert result.exit_code == 0
        assert result.output.split() == ["avatar", "email", "status"]

    def test_write(self, runner, tmp_path):
        """Test writing the catalogue document"""
        output = tmp_path / "API.md"

        result = runner.invoke(cli, ["write", "sample_app:UserView", "-o", str(output)])

        assert result.exit_code == 0
        assert "### <a id=User></a>User" in output.read_text(encoding="utf-8")

    def test_bad_import(self, runner):
        """Test unknown modules are reported"""
        result = runner.invoke(cli, ["types", "missing_module:View"])

        assert result.exit_code == 2
        assert "Cannot import missing_module" in result.output


class TestLoadObject:
    """Test object loading"""

    def test_load(self):
        """Test module:Object paths"""
        assert load_object("sample_app:UserView") is UserView

    def test_missing_attribute(self):
        """Test unknown attributes"""
        with pytest.raises(click.BadParameter):
            load_object("sample_app:NoSuchView")
